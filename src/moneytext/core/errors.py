"""Error codes and user-friendly messages.

This module defines the error catalog for extraction and import.
Each error has:
- code: Unique identifier
- message: Technical description (for logs)
- user_message: User-friendly explanation
- suggestion: Actionable guidance for the user
- retry_allowed: Whether the error is retryable
"""

ERROR_CATALOG: dict[str, dict] = {
    "EXTRACT_001": {
        "code": "EXTRACT_001",
        "message": "Amount could not be parsed or was out of bounds",
        "user_message": "We couldn't read the amount in this message.",
        "suggestion": "The message was skipped; no action needed.",
        "retry_allowed": False,
    },
    "EXTRACT_002": {
        "code": "EXTRACT_002",
        "message": "Date did not match any supported statement format",
        "user_message": "We couldn't read the date on this statement row.",
        "suggestion": "The row was skipped; no action needed.",
        "retry_allowed": False,
    },
    "EXTRACT_003": {
        "code": "EXTRACT_003",
        "message": "Email body part could not be decoded",
        "user_message": "We couldn't read the content of this email.",
        "suggestion": "The email was skipped; no action needed.",
        "retry_allowed": False,
    },
    "EXTRACT_004": {
        "code": "EXTRACT_004",
        "message": "Parsed fields failed record validation",
        "user_message": "This message didn't look like a real transaction.",
        "suggestion": "The message was skipped; no action needed.",
        "retry_allowed": False,
    },
    "FILE_001": {
        "code": "FILE_001",
        "message": "Statement file is corrupted or unreadable",
        "user_message": "This statement file appears to be corrupted or damaged.",
        "suggestion": "Try downloading the statement again from your bank's website.",
        "retry_allowed": True,
    },
    "FILE_002": {
        "code": "FILE_002",
        "message": "Statement PDF is password-protected",
        "user_message": "This statement requires a password.",
        "suggestion": "Please provide the PDF password and try again.",
        "retry_allowed": True,
    },
    "FILE_003": {
        "code": "FILE_003",
        "message": "Unsupported statement file type",
        "user_message": "We can't read this type of file.",
        "suggestion": "Please upload a PDF, CSV or Excel statement.",
        "retry_allowed": False,
    },
    "API_001": {
        "code": "API_001",
        "message": "Invalid content type uploaded",
        "user_message": "Only PDF, CSV and plain-text statements are supported.",
        "suggestion": "Please upload a PDF, CSV, Excel or text file.",
        "retry_allowed": False,
    },
    "API_002": {
        "code": "API_002",
        "message": "File size exceeds maximum limit",
        "user_message": "The file is too large.",
        "suggestion": "Please upload a smaller statement file.",
        "retry_allowed": False,
    },
    "API_003": {
        "code": "API_003",
        "message": "Transaction not found",
        "user_message": "We couldn't find this transaction.",
        "suggestion": "Please refresh and try again.",
        "retry_allowed": False,
    },
}


def get_error(error_code: str) -> dict:
    """Get error definition by code.

    Args:
        error_code: Error code from the catalog

    Returns:
        Dict with error details (a generic entry for unknown codes)
    """
    if error_code not in ERROR_CATALOG:
        return {
            "code": "UNKNOWN",
            "message": f"Unknown error code: {error_code}",
            "user_message": "An unexpected error occurred.",
            "suggestion": "Please try again. Contact support if the problem persists.",
            "retry_allowed": True,
        }
    return ERROR_CATALOG[error_code]
