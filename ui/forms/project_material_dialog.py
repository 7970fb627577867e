from services.validators import ValidationError
from ui.base.base_edit_form import BaseEditForm
from ui.common.combo_helpers import create_entity_combobox


class ProjectMaterialDialog(BaseEditForm):
    """Выделить проекту материал со склада."""

    SERVICE_NAME = "project_materials"
    ENTITY_NAME = "материал проекта"

    def __init__(self, project, *, context=None, parent=None):
        self.project = project
        super().__init__(None, context=context, parent=parent)
        self.setWindowTitle(f"Материал для проекта «{project}»")

    def build_form(self):
        materials = self.load_lookup(self.context.materials.list_all, "материалы")
        self.material_combo = create_entity_combobox(
            materials, label_func=lambda m: m.name, placeholder="— Материал —"
        )
        self.add_combo("material_id", "Материал", self.material_combo, required=True)
        self.add_line("quantity", "Количество", kind="int", required=True)
        self.add_date("allocated_date", "Дата выдачи")

    def validate(self, data: dict) -> None:
        super().validate(data)
        if data["quantity"] <= 0:
            raise ValidationError("Количество должно быть больше нуля", ["quantity"])

    def success_message(self) -> str:
        return "Материал выделен проекту"

    def save_data(self, data: dict):
        self.service.allocate(
            self.project.id,
            data["material_id"],
            data["quantity"],
            data.get("allocated_date"),
        )
        return True
