import os
import sys
from pathlib import Path

# Минимальные переменные окружения, чтобы импорт настроек не зависел от .env
os.environ.setdefault("CONFIG_PATH", "config/WorkbenchEquipOnly.json")
os.environ.setdefault("DEFAULT_LANGUAGE", "en")

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))
