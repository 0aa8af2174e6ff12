# workbench_equip/services/lang_service.py
# Описание: таблицы локализованных строк сервера.
#   Плагины регистрируют свои сообщения по языкам; если задан `lang_dir`,
#   таблицы сохраняются в <lang_dir>/<lang>/<plugin>.json, и правки
#   оператора в этих файлах имеют приоритет над значениями по умолчанию.

import json
from pathlib import Path
from typing import Dict, Optional, Union

from loguru import logger

FALLBACK_LANGUAGE = "en"


class LangService:
    def __init__(self, default_language: str = FALLBACK_LANGUAGE, lang_dir: Optional[Union[str, Path]] = None):
        """
        Args:
            default_language: Язык сервера, используется если у игрока язык не задан
            lang_dir: Каталог для файлов локализации; None — только память
        """
        self.default_language = default_language
        self.lang_dir = Path(lang_dir) if lang_dir else None
        # plugin -> lang -> key -> text
        self._messages: Dict[str, Dict[str, Dict[str, str]]] = {}
        self._user_languages: Dict[str, str] = {}
        logger.info("✅ Сервис LangService инициализирован.")

    def _lang_file(self, plugin: str, lang: str) -> Path:
        return self.lang_dir / lang / f"{plugin}.json"

    def _read_lang_file(self, path: Path) -> Optional[Dict[str, str]]:
        """None, если файл поврежден: такой файл не перезаписываем."""
        if not path.exists():
            return {}
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            logger.error(f"❌ Файл локализации поврежден, используются значения по умолчанию: {path} ({e})")
            return None
        if not isinstance(data, dict):
            logger.error(f"❌ Файл локализации должен содержать объект: {path}")
            return None
        return {str(k): str(v) for k, v in data.items()}

    def register_messages(self, messages: Dict[str, str], plugin: str, lang: str = FALLBACK_LANGUAGE) -> None:
        """
        Регистрирует сообщения плагина для языка.

        Ключи, уже присутствующие в файле локализации, не перезаписываются;
        недостающие добавляются в файл.
        """
        lang = lang.lower()
        table = dict(messages)

        if self.lang_dir is not None:
            path = self._lang_file(plugin, lang)
            stored = self._read_lang_file(path)
            if stored is not None:
                table.update(stored)
            if stored is not None and set(table) - set(stored):
                path.parent.mkdir(parents=True, exist_ok=True)
                with open(path, "w", encoding="utf-8") as f:
                    json.dump(table, f, ensure_ascii=False, indent=2)
                logger.debug(f"📝 Файл локализации обновлен: {path}")

        self._messages.setdefault(plugin, {})[lang] = table
        logger.debug(f"🌐 Зарегистрировано {len(table)} сообщений {plugin} для языка '{lang}'")

    def unregister_messages(self, plugin: str) -> None:
        self._messages.pop(plugin, None)

    def set_language(self, user_id: str, lang: str) -> None:
        self._user_languages[str(user_id)] = lang.lower()

    def get_language(self, user_id: Optional[str] = None) -> str:
        if user_id is not None and str(user_id) in self._user_languages:
            return self._user_languages[str(user_id)]
        return self.default_language

    def get_message(
        self,
        key: str,
        plugin: str,
        user_id: Optional[str] = None,
        lang: Optional[str] = None,
    ) -> str:
        """
        Возвращает текст сообщения на языке игрока.

        Порядок поиска: `lang` (если передан), иначе язык игрока; затем язык
        сервера, английский и сам ключ.
        """
        preferred = lang.lower() if lang else self.get_language(user_id)
        tables = self._messages.get(plugin, {})
        for candidate in (preferred, self.default_language, FALLBACK_LANGUAGE):
            text = tables.get(candidate, {}).get(key)
            if text is not None:
                return text
        logger.warning(f"⚠️ Сообщение '{key}' не найдено для плагина {plugin}")
        return key
