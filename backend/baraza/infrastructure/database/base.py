"""Declarative base shared by every Baraza table."""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    pass
