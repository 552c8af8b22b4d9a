"""Interface-level constants for the task list TUI."""

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M"
SHORT_DATE_FORMAT = "%b %d"

# Tooltip groups: only the focused item's entries feed the shared tooltip line.
TOOLTIP_GROUP_ACTIVE = "rootp"
TOOLTIP_GROUP_INACTIVE = "notp"

ITEM_KEYS = {
    "complete": "c-x",
    "schedule": "c-s",
    "start": "c-b",
    "due": "c-e",
    "delete": "c-k",
}

LANG_PACK = {
    "en": {
        "TOOLTIP_COMPLETE": "Complete",
        "TOOLTIP_UNCOMPLETE": "Mark as not done",
        "TOOLTIP_SCHEDULED": "Scheduled",
        "TOOLTIP_START": "Start (defer until)",
        "TOOLTIP_DUE": "Due",
        "TOOLTIP_DELETE": "Delete",
        "TAP_TO_SCHEDULE": "tap to schedule",
        "NO_START_DATE": "no start date",
        "NO_DUE_DATE": "no due date",
        "OVERLAY_TITLE_SCHEDULE": "Schedule",
        "OVERLAY_TITLE_START": "Start",
        "OVERLAY_TITLE_DUE": "Due",
        "OVERLAY_HINT": "Enter: save · Esc: close · empty/none: clear · e.g. tomorrow, +3d, 2024-05-01 09:00",
        "OVERLAY_INVALID": "Invalid date: {error}",
        "EMPTY_LIST": "No tasks here. Press Ctrl-N to capture one.",
        "FOOTER_HINTS": "^N new · Tab next · Esc collapse · ^X done · ^S schedule · ^B start · ^E due · ^K delete · F2 {availability} · F3 {order} {direction} · ^Q quit",
        "STATUS_STORE_ERROR": "Store error: {error}",
        "STATUS_CREATED": "Task captured",
        "STATUS_BAD_QUERY": "Invalid search pattern: {error}",
        "AVAILABILITY_ALL": "all",
        "AVAILABILITY_INCOMPLETE": "incomplete",
        "AVAILABILITY_AVAILABLE": "available",
        "AVAILABILITY_DONE": "done",
        "ORDER_CAPTURED": "captured",
        "ORDER_START": "start",
        "ORDER_DUE": "due",
        "ORDER_SCHEDULED": "scheduled",
        "DIRECTION_ASC": "↑",
        "DIRECTION_DESC": "↓",
        "APP_TITLE": "Tasks",
        "LIST_COUNT": "{shown} of {total}",
        "CLI_ADDED": "Added {id}",
        "CLI_EMPTY": "No tasks",
        "REL_NOW": "a few seconds",
        "REL_MINUTE": "a minute",
        "REL_MINUTES": "{n} minutes",
        "REL_HOUR": "an hour",
        "REL_HOURS": "{n} hours",
        "REL_DAY": "a day",
        "REL_DAYS": "{n} days",
        "REL_MONTH": "a month",
        "REL_MONTHS": "{n} months",
        "REL_YEAR": "a year",
        "REL_YEARS": "{n} years",
        "REL_FUTURE": "in {span}",
        "REL_PAST": "{span} ago",
    },
    "ru": {
        "TOOLTIP_COMPLETE": "Выполнить",
        "TOOLTIP_UNCOMPLETE": "Вернуть в работу",
        "TOOLTIP_SCHEDULED": "Запланировано",
        "TOOLTIP_START": "Начало (отложить до)",
        "TOOLTIP_DUE": "Срок",
        "TOOLTIP_DELETE": "Удалить",
        "TAP_TO_SCHEDULE": "запланировать",
        "NO_START_DATE": "без даты начала",
        "NO_DUE_DATE": "без срока",
        "OVERLAY_TITLE_SCHEDULE": "Запланировать",
        "OVERLAY_TITLE_START": "Начало",
        "OVERLAY_TITLE_DUE": "Срок",
        "OVERLAY_INVALID": "Неверная дата: {error}",
        "EMPTY_LIST": "Задач нет. Ctrl-N: новая задача.",
        "STATUS_STORE_ERROR": "Ошибка хранилища: {error}",
        "STATUS_CREATED": "Задача добавлена",
        "APP_TITLE": "Задачи",
        "LIST_COUNT": "{shown} из {total}",
        "CLI_ADDED": "Добавлена {id}",
        "CLI_EMPTY": "Задач нет",
        "REL_NOW": "несколько секунд",
        "REL_FUTURE": "через {span}",
        "REL_PAST": "{span} назад",
    },
}
