from ui.base.base_edit_form import BaseEditForm


class ClientForm(BaseEditForm):
    """Форма клиента."""

    SERVICE_NAME = "clients"
    ENTITY_NAME = "клиент"
    EMAIL_REQUIRED = True

    def build_form(self):
        self.add_line("name", "Название", required=True)
        self.add_line("email", "Email", kind="email", required=self.EMAIL_REQUIRED)
        self.add_line("phone", "Телефон", placeholder="+7 900 000-00-00")
        self.add_text("address", "Адрес")


class SupplierForm(ClientForm):
    SERVICE_NAME = "suppliers"
    ENTITY_NAME = "поставщик"
    EMAIL_REQUIRED = False
