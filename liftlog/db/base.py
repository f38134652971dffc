"""Declarative base shared by the record store models."""

from sqlalchemy import MetaData
from sqlalchemy.orm import DeclarativeBase

# Index names must match the ones created by alembic/versions
metadata = MetaData(naming_convention={"ix": "ix_%(table_name)s_%(column_0_N_name)s"})


class Base(DeclarativeBase):
    metadata = metadata
