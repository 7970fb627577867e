"""Proxy базы данных локального хранилища.

Привязывается к конкретной SQLite-базе в :func:`database.init.init_from_path`.
"""

from peewee import Proxy

db = Proxy()
