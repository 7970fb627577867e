from services.validators import ValidationError
from ui.base.base_edit_form import BaseEditForm


class WarehouseRackForm(BaseEditForm):
    SERVICE_NAME = "warehouse_racks"
    ENTITY_NAME = "стеллаж"

    def build_form(self):
        self.add_line("name", "Название", required=True)
        self.add_line("location", "Расположение", required=True)
        self.add_line("capacity", "Вместимость", kind="int")

    def validate(self, data: dict) -> None:
        super().validate(data)
        capacity = data.get("capacity")
        if capacity is not None and capacity < 0:
            raise ValidationError("Вместимость не может быть отрицательной", ["capacity"])
