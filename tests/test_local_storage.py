from infrastructure.local_storage import MANAGER_KEY, TOKEN_KEY


def test_set_get_and_overwrite(storage):
    assert storage.get_item(TOKEN_KEY) is None

    storage.set_item(TOKEN_KEY, "first")
    storage.set_item(TOKEN_KEY, "second")

    assert storage.get_item(TOKEN_KEY) == "second"
    assert storage.keys() == [TOKEN_KEY]


def test_remove_and_clear(storage):
    storage.set_item(TOKEN_KEY, "t")
    storage.set_item(MANAGER_KEY, "{}")

    storage.remove_item(TOKEN_KEY)
    assert storage.get_item(TOKEN_KEY) is None
    assert storage.get_item(MANAGER_KEY) == "{}"

    storage.remove_item("missing")
    storage.clear()
    assert storage.keys() == []
