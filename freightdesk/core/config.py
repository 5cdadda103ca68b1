from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    PROJECT_NAME: str = "Freight Desk Back Office"
    API_PREFIX: str = ""
    LOG_LEVEL: str = "INFO"

    # Name recorded on approvals and activity entries when no X-Actor header is sent
    DEFAULT_ACTOR: str = "You"
    CURRENCY: str = "INR"

    EXCEPTION_QUEUE_SIZE: int = 4
    ENABLE_ADMIN_RESET: bool = True
    REPORT_FOOTER: str = "Computer generated invoice. Queries: billing desk, quote the invoice number."

    class Config:
        case_sensitive = True

settings = Settings()
