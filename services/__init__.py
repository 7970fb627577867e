"""Пакет прикладных сервисов.

Подмодули не импортируются на уровне пакета: ``import services`` не тянет
за собой HTTP-клиент и PySide6.

Импортируйте нужные подмодули напрямую, например:
    from services.client_service import ClientService
    from services.dashboard_service import load_dashboard
"""

__all__: list[str] = []
