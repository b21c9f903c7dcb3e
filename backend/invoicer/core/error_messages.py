# invoicer/core/error_messages.py
from fastapi import HTTPException, status


class ErrorResponses:
    # 400
    MISSING_CREDENTIALS = HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Email and password are required.")
    USER_EXISTS = HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Email already registered.")
    EMAIL_REQUIRED = HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Email is required.")
    ADMIN_EXISTS = HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="An admin user already exists.")
    INVALID_ROLE = HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid role.")
    OWN_ROLE_CHANGE = HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Cannot change your own role.")
    NO_FILE = HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No file uploaded.")
    INVALID_FILE_TYPE = HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Only image files are allowed.")
    FILE_TOO_LARGE = HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="File too large.")

    # 401 / 403
    NOT_AUTHENTICATED = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Authentication required.",
        headers={"WWW-Authenticate": "Bearer"},
    )
    INVALID_CREDENTIALS = HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid email or password.")
    INVALID_TOKEN = HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Invalid or expired token.")
    ADMIN_REQUIRED = HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Admin access required.")

    # 404
    USER_NOT_FOUND = HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found.")
    LOGO_NOT_FOUND = HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="No logo found.")

    # 5xx
    SERVICE_UNAVAILABLE = HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail="Service temporarily unavailable.")

    @staticmethod
    def bad_request(detail: str) -> HTTPException:
        return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)

    @staticmethod
    def not_found(detail: str) -> HTTPException:
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=detail)
