"""
Pydantic schemas for crisis support resources.
"""
from mindfulchat.schemas.base import CamelModel


class CrisisResourceResponse(CamelModel):
    """A hotline shown by the crisis modal."""
    label: str
    href: str
