from services.dto import UNITS_OF_MEASURE
from ui.base.base_edit_form import BaseEditForm
from ui.common.combo_helpers import create_choice_combobox, create_entity_combobox

UNIT_LABELS = {
    "kg": "кг",
    "litre": "литр",
    "piece": "шт.",
    "meter": "м",
    "bag": "мешок",
    "ton": "т",
}


class MaterialForm(BaseEditForm):
    SERVICE_NAME = "materials"
    ENTITY_NAME = "материал"

    def build_form(self):
        self.add_line("name", "Название", required=True)

        suppliers = self.load_lookup(self.context.suppliers.list_all, "поставщиков")
        self.supplier_combo = create_entity_combobox(
            suppliers, label_func=lambda s: s.name, placeholder="— Поставщик —"
        )
        self.add_combo("supplier_id", "Поставщик", self.supplier_combo, required=True)

        self.add_line("unit_price", "Цена за единицу", kind="decimal", required=True)
        self.unit_combo = create_choice_combobox(
            {unit: UNIT_LABELS.get(unit, unit) for unit in UNITS_OF_MEASURE}
        )
        self.add_combo("unit_of_measure", "Единица измерения", self.unit_combo)
        self.add_text("description", "Описание")
