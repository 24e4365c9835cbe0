from prometheus_client import Counter


reminders_computed_total = Counter(
    "heart_rate_reminders_computed_total",
    "Total heart-rate reminder schedules computed",
    ["kind"],
)

reminders_snoozed_total = Counter(
    "heart_rate_reminders_snoozed_total",
    "Total heart-rate reminders snoozed by clients",
)

vitals_recorded_total = Counter(
    "vitals_recorded_total",
    "Total readings stored, by record type",
    ["record_type"],
)
