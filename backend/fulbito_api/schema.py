from .db import engine
from .models import Base


def ensure_schema() -> None:
    Base.metadata.create_all(engine)


def reset_schema() -> None:
    Base.metadata.drop_all(engine)
    Base.metadata.create_all(engine)
