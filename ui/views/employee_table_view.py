from core.app_context import get_app_context
from ui.base.base_table_model import Column
from ui.base.base_table_view import BaseTableView
from ui.forms.employee_form import EmployeeForm


class EmployeeTableView(BaseTableView):
    COLUMNS = [
        Column("Сотрудник", "full_name"),
        Column("Должность", "position"),
        Column("Email", "email"),
        Column("Телефон", "phone"),
        Column("Дата найма", "hire_date", kind="date"),
        Column("Оклад", "base_salary", kind="money"),
    ]
    ENTITY_NAME = "сотрудника"
    SEARCH_PLACEHOLDER = "Поиск по имени, email или должности…"

    def __init__(self, parent=None, *, context=None, autoload=True):
        context = context or get_app_context()
        super().__init__(
            parent,
            context=context,
            service=context.employees,
            form_class=EmployeeForm,
            autoload=autoload,
        )
