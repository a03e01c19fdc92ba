from prometheus_client import Counter

# Denúncias registradas
REPORTS_SUBMITTED = Counter(
    "alerta_dengue_reports_submitted_total",
    "Total de denúncias registradas"
)

# Mudanças de status por status de destino
STATUS_CHANGES = Counter(
    "alerta_dengue_report_status_changes_total",
    "Total de mudanças de status de denúncias",
    ["status"]
)
