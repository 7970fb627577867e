from services.dto import InventoryItemDTO
from ui.views.inventory_table_view import InventoryTableView, inventory_columns
from ui.views.reports_tab import ReportsTab, workload_columns


def test_workload_columns_follow_first_row():
    columns = workload_columns([{"id": 1, "employee_name": "Иван", "project_count": 2}])

    assert [c.header for c in columns] == ["Сотрудник", "Проектов"]
    assert workload_columns([]) == []


def test_reports_tab_loads_value_and_workload(qapp, context, session):
    session.queue(200, {"total_value": 12500})
    session.queue(200, [{"employee_name": "Иван", "project_count": 2}])

    tab = ReportsTab(context=context)

    assert tab.total_value_label.text() == "$12 500.00"
    assert tab.workload_table.model().rowCount() == 1
    assert tab.workload_empty.isHidden()


def test_inventory_view_resolves_names_and_flags_low_stock(qapp, context, session, toasts):
    session.queue(200, [{"id": 1, "material_id": 10, "rack_id": 100, "quantity": 3}])
    session.queue(200, [{"id": 10, "name": "Цемент"}])
    session.queue(200, {"racks": [{"id": 100, "name": "A-1"}]})

    view = InventoryTableView(context=context)

    (item,) = view.visible_items()
    assert (item.material_name, item.rack_name) == ("Цемент", "A-1")
    stock_column = [c.header for c in view.COLUMNS].index("Запас")
    assert view.model.data(view.model.index(0, stock_column)) == "⚠️ мало"


def test_stock_column_is_blank_without_quantity():
    stock = next(c for c in inventory_columns(10) if c.header == "Запас")

    assert stock.value(InventoryItemDTO(id=1)) == ""
    assert stock.value(InventoryItemDTO(id=2, quantity=10)) == "норма"
