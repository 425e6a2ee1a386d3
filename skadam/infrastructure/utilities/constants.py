"""
Application constants for the SKADAM café backend

Centralizes all magic numbers and hard-coded values to improve maintainability.
"""

from typing import Final


class StorageKeys:
    """Keys of the independently persisted JSON blobs"""

    MENU_ITEMS: Final[str] = "menu_items"
    CATEGORIES: Final[str] = "categories"
    ORDERS: Final[str] = "orders"
    ORDER_COUNTER: Final[str] = "order_counter"
    SUB_USERS: Final[str] = "sub_users"
    LOYALTY_CUSTOMERS: Final[str] = "loyalty_customers"
    LOYALTY_TRANSACTIONS: Final[str] = "loyalty_transactions"
    LOYALTY_SETTINGS: Final[str] = "loyalty_settings"
    QUIZ_QUESTIONS: Final[str] = "quiz_questions"
    PROMO_CODES: Final[str] = "promo_codes"
    QUIZ_ATTEMPTS: Final[str] = "quiz_attempts"
    NOTIFICATION_SETTINGS: Final[str] = "notification_settings"
    STORE_SETTINGS: Final[str] = "store_settings"


class SchemaSettings:
    """Persisted envelope format"""

    CURRENT_VERSION: Final[int] = 1
    VERSION_FIELD: Final[str] = "schema_version"
    DATA_FIELD: Final[str] = "data"


class PromotionSettings:
    """Quiz reward promo code parameters"""

    QUIZ_CODE_PREFIX: Final[str] = "QUIZ"
    QUIZ_CODE_DIGITS: Final[int] = 6
    QUIZ_DISCOUNT_PERCENTAGE: Final[int] = 15
    QUIZ_MAX_USAGE: Final[int] = 1
    QUIZ_VALIDITY_DAYS: Final[int] = 7



class SecuritySettings:
    """Password hashing parameters"""

    PBKDF2_ALGORITHM: Final[str] = "sha256"
    PBKDF2_ITERATIONS: Final[int] = 120_000
    SALT_BYTES: Final[int] = 16


class LoggingSettings:
    """Logging file sizes and rotation settings"""

    MAX_LOG_FILE_SIZE: Final[int] = 10 * 1024 * 1024  # 10MB
    MAIN_LOG_BACKUP_COUNT: Final[int] = 10
    ERROR_LOG_BACKUP_COUNT: Final[int] = 10
    JSON_LOG_BACKUP_COUNT: Final[int] = 5


class FileSettings:
    """File and directory names"""

    MAIN_LOG_FILE: Final[str] = "skadam.log"
    ERROR_LOG_FILE: Final[str] = "errors.log"
    JSON_LOG_FILE: Final[str] = "skadam.json.log"
    STORAGE_FILE_SUFFIX: Final[str] = ".json"


class PerformanceSettings:
    """Performance thresholds"""

    SLOW_OPERATION_THRESHOLD_MS: Final[int] = 1000


class ErrorCodes:
    """Error codes reported to API clients"""

    GENERAL_ERROR: Final[str] = "GENERAL_ERROR"
    VALIDATION_ERROR: Final[str] = "VALIDATION_ERROR"
    DUPLICATE_KEY: Final[str] = "DUPLICATE_KEY"
    BUSINESS_ERROR: Final[str] = "BUSINESS_ERROR"
    NOT_FOUND: Final[str] = "NOT_FOUND"
    PERSISTENCE_ERROR: Final[str] = "PERSISTENCE_ERROR"
