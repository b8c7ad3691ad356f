# API Routes Module
from app.api.routes import recommendations

__all__ = [
    "recommendations",
]
