from ui.base.base_edit_form import BaseEditForm


class EmployeeForm(BaseEditForm):
    SERVICE_NAME = "employees"
    ENTITY_NAME = "сотрудник"

    def build_form(self):
        self.add_line("first_name", "Имя", required=True)
        self.add_line("last_name", "Фамилия", required=True)
        self.add_line("email", "Email", kind="email", required=True)
        self.add_line("phone", "Телефон")
        self.add_line("position", "Должность")
        self.add_date("hire_date", "Дата найма")
        self.add_line("base_salary", "Оклад", kind="decimal", required=True)
        self.add_text("address", "Адрес")
