from services.validators import ValidationError
from ui.base.base_edit_form import BaseEditForm
from ui.common.combo_helpers import create_entity_combobox


class InventoryForm(BaseEditForm):
    """Позиция склада: материал на стеллаже и его количество."""

    SERVICE_NAME = "inventory"
    ENTITY_NAME = "позиция склада"

    def build_form(self):
        materials = self.load_lookup(self.context.materials.list_all, "материалы")
        self.material_combo = create_entity_combobox(
            materials, label_func=lambda m: m.name, placeholder="— Материал —"
        )
        self.add_combo("material_id", "Материал", self.material_combo, required=True)

        racks = self.load_lookup(self.context.warehouse_racks.list_all, "стеллажи")
        self.rack_combo = create_entity_combobox(
            racks,
            label_func=lambda r: f"{r.name} ({r.location})" if r.location else r.name,
            placeholder="— Стеллаж —",
        )
        self.add_combo("rack_id", "Стеллаж", self.rack_combo, required=True)

        self.add_line("quantity", "Количество", kind="int", required=True)
        self.add_date("last_restocked", "Последнее пополнение")

    def validate(self, data: dict) -> None:
        super().validate(data)
        if data["quantity"] < 0:
            raise ValidationError("Количество не может быть отрицательным", ["quantity"])
