# Display labels used by the dashboard and mobile clients (pt-BR).
from cityfix.models.report import ReportCategory, ReportStatus

STATUS_LABELS = {
    ReportStatus.PENDING.value: "Pendente",
    ReportStatus.IN_PROGRESS.value: "Em Andamento",
    ReportStatus.RESOLVED.value: "Resolvido",
    ReportStatus.REJECTED.value: "Rejeitado",
}

CATEGORY_LABELS = {
    ReportCategory.INFRASTRUCTURE.value: "Infraestrutura",
    ReportCategory.ENVIRONMENT.value: "Meio Ambiente",
    ReportCategory.SAFETY.value: "Segurança",
    ReportCategory.OTHER.value: "Outros",
}


def status_label(status: str) -> str:
    return STATUS_LABELS.get(status, str(status))


def category_label(category: str) -> str:
    return CATEGORY_LABELS.get(category, str(category))
