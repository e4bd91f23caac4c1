# socialnet/db/base.py
from sqlalchemy.orm import DeclarativeBase

# rango de una columna Integer (int4 en Postgres)
MAX_ID = 2**31 - 1


class Base(DeclarativeBase):
    pass
