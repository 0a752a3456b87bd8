"""Settings read from the environment (and a local .env file)."""

from dataclasses import dataclass
import os

from dotenv import load_dotenv


@dataclass(frozen=True)
class Settings:
    db_path: str = "heritage_health.db"
    canvas_width: float = 800.0
    canvas_height: float = 600.0
    grid_unit_width: float = 200.0
    grid_unit_height: float = 100.0
    log_level: str = "WARNING"


def load_settings() -> Settings:
    load_dotenv()
    return Settings(
        db_path=os.getenv("HERITAGE_DB_PATH", Settings.db_path),
        canvas_width=float(os.getenv("HERITAGE_CANVAS_WIDTH", Settings.canvas_width)),
        canvas_height=float(os.getenv("HERITAGE_CANVAS_HEIGHT", Settings.canvas_height)),
        grid_unit_width=float(os.getenv("HERITAGE_GRID_UNIT_WIDTH", Settings.grid_unit_width)),
        grid_unit_height=float(os.getenv("HERITAGE_GRID_UNIT_HEIGHT", Settings.grid_unit_height)),
        log_level=os.getenv("HERITAGE_LOG_LEVEL", Settings.log_level).upper(),
    )
