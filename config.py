import os
from dataclasses import dataclass
from dotenv import load_dotenv

load_dotenv()

@dataclass
class Settings:
    # Application
    app_name: str = os.getenv("APP_NAME", "Book Catalog")
    debug: bool = os.getenv("DEBUG", "False").lower() in ("true", "1", "yes")

    # Catalog file
    catalog_file: str = os.getenv("CATALOG_FILE", "books.csv")
    encoding: str = os.getenv("CATALOG_ENCODING", "utf-8")

    # CLI output mode: plain | json | rich
    output_mode: str = os.getenv("LIB_CLI_OUTPUT", "plain")

    # Logging
    log_level: str = os.getenv("LOG_LEVEL", "DEBUG" if debug else "WARNING")


settings = Settings()
