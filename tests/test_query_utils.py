from types import SimpleNamespace

from services.query_utils import filter_records


RECORDS = [
    SimpleNamespace(name="ООО Ромашка", email="info@romashka.ru"),
    SimpleNamespace(name="Стройдвор", email=None),
    SimpleNamespace(name="Bricks Ltd", email="SALES@bricks.com"),
]


def test_empty_text_keeps_everything():
    assert filter_records(RECORDS, "", ("name", "email")) == RECORDS
    assert filter_records(RECORDS, None, ("name", "email")) == RECORDS


def test_match_is_case_insensitive():
    assert filter_records(RECORDS, "РОМАШ", ("name", "email")) == [RECORDS[0]]

    assert filter_records(RECORDS, "sales@", ("name", "email")) == [RECORDS[2]]


def test_none_fields_never_match():
    assert filter_records(RECORDS, "none", ("email",)) == []


def test_callable_fields_and_dicts():
    rows = [{"first": "Иван", "last": "Петров"}, {"first": "Анна", "last": "Смирнова"}]
    full_name = lambda r: f"{r['first']} {r['last']}"  # noqa: E731

    assert filter_records(rows, "иван пет", (full_name,)) == [rows[0]]
    assert filter_records(rows, "смирнова", ("last",)) == [rows[1]]


def test_surrounding_spaces_are_part_of_the_term():
    rows = [{"name": "smith jones"}, {"name": "bob smith"}]
    assert filter_records(rows, "smith ", ("name",)) == [rows[0]]

    spaced = [{"name": "a b"}, {"name": "ab"}]
    assert filter_records(spaced, " ", ("name",)) == [spaced[0]]
