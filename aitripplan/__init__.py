"""AITripPlan: trip-activity suggestions from a chat-completion model."""

__version__ = "0.3.0"
