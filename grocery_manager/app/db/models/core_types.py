import enum

# Clés de la table settings
LAST_ORDER_DATE_KEY = "lastOrderDate"


class ReadingOutcome(str, enum.Enum):
    decremented = "DECREMENTED"
    missing_input = "MISSING_INPUT"
    unknown_item = "UNKNOWN_ITEM"
    failed = "FAILED"
