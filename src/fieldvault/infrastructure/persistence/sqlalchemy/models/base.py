"""Declarative base shared by all FieldVault models."""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    pass
