# aitripplan/routes/__init__.py
from aitripplan.routes.travel import create_travel_blueprint

__all__ = ["create_travel_blueprint"]
