import os
from dotenv import load_dotenv

# Load .env from the project root
load_dotenv(os.path.join(os.path.dirname(__file__), "..", "..", ".env"))

BASE_DIR = os.path.dirname(os.path.abspath(__file__))
PROJECT_DIR = os.path.abspath(os.path.join(BASE_DIR, "..", ".."))

# Interchange vocabulary (Hungarian localization)
HEADER_COLUMNS: tuple[str, ...] = tuple(
    os.getenv("FRAYER_HEADER_COLUMNS", "Név;Meghatározás;Jellemzők;Példák;Ellenpéldák").split(";")
)
# The exported header must be recognised on re-import
HEADER_KEYWORD: str = HEADER_COLUMNS[0].strip().lower()
UNNAMED_PLACEHOLDER: str = os.getenv("FRAYER_UNNAMED_PLACEHOLDER", "Névtelen")
EXPORT_FILENAME: str = os.getenv("FRAYER_EXPORT_FILENAME", "freyer_konyvtar.csv")
EXPORT_DELIMITER: str = ";"
BYTE_ORDER_MARK: str = "\ufeff"

# Single-page UI served by the local adapter
UI_DIR: str = os.getenv("FRAYER_UI_DIR", os.path.join(PROJECT_DIR, "ui"))

# Logging
LOG_LEVEL: str = os.getenv("FRAYER_LOG_LEVEL", "INFO")
LOG_FORMAT: str = os.getenv("FRAYER_LOG_FORMAT", "text")  # text | json
