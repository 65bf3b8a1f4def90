import uuid

from sqlalchemy.orm import DeclarativeBase


def new_document_id() -> str:
    return uuid.uuid4().hex


class Base(DeclarativeBase):
    pass
