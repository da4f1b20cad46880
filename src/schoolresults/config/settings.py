from dataclasses import dataclass
import os
from dotenv import load_dotenv


load_dotenv()


@dataclass(frozen=True)
class Settings:
    best_principal_count: int = int(os.getenv("SCHOOLRESULTS_BEST_PRINCIPAL_COUNT", "3"))
    round_to: int = int(os.getenv("SCHOOLRESULTS_ROUND_TO", "2"))
    default_max_marks: float = float(os.getenv("SCHOOLRESULTS_DEFAULT_MAX_MARKS", "100"))


settings = Settings()
