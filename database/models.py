from datetime import datetime

from peewee import CharField, DateTimeField, Model, TextField

from database.db import db


class BaseModel(Model):
    class Meta:
        database = db


class StorageItem(BaseModel):
    """Запись локального хранилища «ключ → значение»."""

    key = CharField(primary_key=True, max_length=128)
    value = TextField()
    updated_at = DateTimeField(default=datetime.now)

    class Meta:
        table_name = "storage_items"

    def __str__(self) -> str:
        return self.key


ALL_MODELS = [StorageItem]
