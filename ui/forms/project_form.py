from services.dto import DEFAULT_PROJECT_STATUS, PROJECT_STATUSES, PROJECT_TYPES
from services.validators import ValidationError
from ui.base.base_edit_form import BaseEditForm
from ui.common.combo_helpers import (
    create_choice_combobox,
    create_entity_combobox,
    select_combo_data,
)


class ProjectForm(BaseEditForm):
    """Форма проекта: клиент и тип выбираются из списков."""

    SERVICE_NAME = "projects"
    ENTITY_NAME = "проект"

    def build_form(self):
        self.add_line("name", "Название", required=True)

        clients = self.load_lookup(self.context.clients.list_all, "клиентов")
        self.client_combo = create_entity_combobox(
            clients, label_func=lambda c: c.name, placeholder="— Клиент —"
        )
        self.add_combo("client_id", "Клиент", self.client_combo)

        self.type_combo = create_choice_combobox(PROJECT_TYPES, placeholder="— Тип —")
        self.add_combo("project_type_id", "Тип проекта", self.type_combo)

        self.status_combo = create_choice_combobox(PROJECT_STATUSES)
        select_combo_data(self.status_combo, DEFAULT_PROJECT_STATUS)
        self.add_combo("status", "Статус", self.status_combo)

        self.add_date("start_date", "Дата начала")
        self.add_date("end_date", "Дата окончания")
        self.add_line("budget", "Бюджет", kind="decimal", placeholder="0.00")
        self.add_text("description", "Описание")

    def validate(self, data: dict) -> None:
        super().validate(data)
        start, end = data.get("start_date"), data.get("end_date")
        if start and end and end < start:
            raise ValidationError(
                "Дата окончания раньше даты начала", ["start_date", "end_date"]
            )
        budget = data.get("budget")
        if budget is not None and budget < 0:
            raise ValidationError("Бюджет не может быть отрицательным", ["budget"])
