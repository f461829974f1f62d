from pydantic_settings import BaseSettings
from pydantic import field_validator
from typing import List, Optional


class Settings(BaseSettings):
    # Database Configuration
    database_url: Optional[str] = None
    db_username: Optional[str] = None
    db_password: Optional[str] = None
    db_host: str = "localhost"
    db_port: str = "5432"
    db_name: Optional[str] = None
    db_connect_timeout: int = 30

    # Server
    port: int = 3000
    frontend_url: str = "*"
    log_level: str = "INFO"

    # Base URL the client library talks to
    api_url: str = "http://localhost:3000"

    # Computed columns. Both expressions are evaluated against the row's own
    # columns by the triggers in workshop_mgmt.triggers.
    install_triggers: bool = True
    workshop_score_expression: str = (
        "COALESCE(manpower, 0) * 2"
        " + COALESCE(customer_visits, 0) * 0.5"
        " + CASE WHEN recovery = 'yes' THEN 10 ELSE 0 END"
    )
    revenue_profit_expression: str = "total_sales - COALESCE(service_cost, 0)"

    @field_validator('log_level', mode='before')
    @classmethod
    def parse_log_level(cls, v):
        if v is None or v == '':
            return "INFO"
        return str(v).upper()

    @field_validator('db_connect_timeout', mode='before')
    @classmethod
    def parse_connect_timeout(cls, v):
        if v is None or v == '':
            return 30
        return int(v)

    @property
    def cors_origins(self) -> List[str]:
        """Comma separated FRONTEND_URL split into a list of origins"""
        origins = [o.strip() for o in self.frontend_url.split(",") if o.strip()]
        return origins or ["*"]

    @property
    def database_connection_url(self) -> str:
        """Build database URL from individual components or use direct URL"""
        if all([self.db_username, self.db_password, self.db_host, self.db_port, self.db_name]):
            return f"postgresql://{self.db_username}:{self.db_password}@{self.db_host}:{self.db_port}/{self.db_name}"
        elif self.database_url:
            return self.database_url
        else:
            return "sqlite:///./workshops.db"  # Fallback to SQLite

    class Config:
        env_file = ".env"


settings = Settings()
