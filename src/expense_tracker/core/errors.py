"""Error codes and user-friendly messages.

Each error has:
- code: Unique identifier
- message: Technical description (for logs)
- user_message: User-friendly explanation
- suggestion: Actionable guidance for the user
"""

ERROR_CATALOG: dict[str, dict] = {
    "AUTH_001": {
        "code": "AUTH_001",
        "message": "Email already registered",
        "user_message": "Email already registered.",
        "suggestion": "Log in instead, or use a different email address.",
    },
    "AUTH_002": {
        "code": "AUTH_002",
        "message": "Invalid email or password",
        "user_message": "Invalid email or password.",
        "suggestion": "Check your credentials and try again.",
    },
    "AUTH_003": {
        "code": "AUTH_003",
        "message": "Missing, invalid or expired bearer token",
        "user_message": "Token missing or invalid.",
        "suggestion": "Please log in again.",
    },
    "USER_001": {
        "code": "USER_001",
        "message": "User not found",
        "user_message": "User not found.",
        "suggestion": "Please log in again.",
    },
    "EXP_001": {
        "code": "EXP_001",
        "message": "Expense not found or not owned by caller",
        "user_message": "Expense not found.",
        "suggestion": "Please refresh and try again.",
    },
    "API_001": {
        "code": "API_001",
        "message": "Resource not found",
        "user_message": "We couldn't find what you were looking for.",
        "suggestion": "Please check the request and try again.",
    },
    "VAL_001": {
        "code": "VAL_001",
        "message": "Request data failed validation",
        "user_message": "Invalid input data.",
        "suggestion": "Please check your input and try again.",
    },
    "DB_001": {
        "code": "DB_001",
        "message": "Database operation failed",
        "user_message": "A database error occurred.",
        "suggestion": "Please try again later.",
    },
    "DB_002": {
        "code": "DB_002",
        "message": "Resource already exists",
        "user_message": "This record already exists.",
        "suggestion": "Please check if the record was already created.",
    },
    "SYS_001": {
        "code": "SYS_001",
        "message": "Internal server error",
        "user_message": "An unexpected error occurred.",
        "suggestion": "Please try again later or contact support.",
    },
}


def get_error(error_code: str) -> dict:
    """Get error definition by code.

    Unknown codes fall back to a generic definition instead of raising.

    Args:
        error_code: Error code from the catalog

    Returns:
        Dict with error details
    """
    if error_code not in ERROR_CATALOG:
        return {
            "code": "UNKNOWN",
            "message": f"Unknown error code: {error_code}",
            "user_message": "An unexpected error occurred.",
            "suggestion": "Please try again. Contact support if the problem persists.",
        }
    return ERROR_CATALOG[error_code]
