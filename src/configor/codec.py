"""Configuration file codec for YAML, JSON and TOML."""
import json
import logging
import os
import tomllib
from pathlib import Path
from typing import Any, Callable, Dict, List, Tuple, Union

import yaml

from configor.exceptions.config import (
    ConfigEncodeError,
    ConfigParseError,
    InvalidConfigShapeError,
    UnsupportedFileTypeError,
)


logger = logging.getLogger(__name__)

YAML_EXTENSIONS = (".yaml", ".yml")
JSON_EXTENSIONS = (".json",)
TOML_EXTENSIONS = (".toml",)

FILE_MODE = 0o600


def _decode_yaml(text: str) -> Any:
    return yaml.safe_load(text)


def _decode_json(text: str) -> Any:
    return json.loads(text) if text.strip() else None


def _decode_toml(text: str) -> Any:
    return tomllib.loads(text)


def _encode_yaml(data: Dict[str, Any]) -> str:
    return yaml.safe_dump(data, sort_keys=False, allow_unicode=True)


def _encode_json(data: Dict[str, Any]) -> str:
    return json.dumps(data, indent=2, ensure_ascii=False) + "\n"


def _error_position(error: Exception) -> Tuple[Any, Any]:
    """Extract 1-based line and column from a parser error if available."""
    mark = getattr(error, "problem_mark", None)
    if mark is not None:
        return mark.line + 1, mark.column + 1
    if isinstance(error, json.JSONDecodeError):
        return error.lineno, error.colno
    lineno = getattr(error, "lineno", None)
    return lineno, getattr(error, "colno", None)


class FormatCodec:
    """Decodes configuration files into dictionaries and encodes them back.

    Format is chosen by file extension. Files with an unrecognized extension
    are tried as TOML, then JSON, then YAML; the first one that yields a
    mapping wins.
    """

    decoders: Dict[str, Callable[[str], Any]] = {
        **{ext: _decode_yaml for ext in YAML_EXTENSIONS},
        **{ext: _decode_json for ext in JSON_EXTENSIONS},
        **{ext: _decode_toml for ext in TOML_EXTENSIONS},
    }
    encoders: Dict[str, Callable[[Dict[str, Any]], str]] = {
        **{ext: _encode_yaml for ext in YAML_EXTENSIONS},
        **{ext: _encode_json for ext in JSON_EXTENSIONS},
    }
    fallback_order: List[Tuple[str, Callable[[str], Any]]] = [
        ("toml", _decode_toml),
        ("json", _decode_json),
        ("yaml", _decode_yaml),
    ]

    def load(self, path: Union[str, Path]) -> Dict[str, Any]:
        """Load a configuration file into a dictionary.

        Args:
            path: Path to the configuration file

        Returns:
            Parsed document (empty dict for an empty file)

        Raises:
            ConfigParseError: If the file cannot be read or parsed
            InvalidConfigShapeError: If the document root is not a mapping
        """
        path = Path(path)
        logger.debug(f"Loading config file: {path}", extra={"path": str(path)})

        try:
            with open(path, "r", encoding="utf-8") as f:
                text = f.read()
        except (OSError, UnicodeDecodeError) as e:
            logger.error(
                f"Failed to read file {path}: {e}",
                extra={"path": str(path), "error": str(e)},
            )
            raise ConfigParseError(
                message=f"Failed to read config file: {e}",
                config_file=str(path),
                original_error=e,
            )

        return self.decode(text, path)

    def decode(self, text: str, path: Union[str, Path]) -> Dict[str, Any]:
        """Decode document text using the format implied by `path`."""
        path = Path(path)
        decoder = self.decoders.get(path.suffix.lower())

        if decoder is None:
            return self._decode_any(text, path)

        try:
            data = decoder(text)
        except (yaml.YAMLError, json.JSONDecodeError, tomllib.TOMLDecodeError) as e:
            line_number, column_number = _error_position(e)
            logger.error(
                f"Parse error in {path}: {e}",
                extra={"path": str(path), "error": str(e)},
            )
            raise ConfigParseError(
                message=f"Failed to parse config file: {e}",
                config_file=str(path),
                line_number=line_number,
                column_number=column_number,
                original_error=e,
            )

        return self._as_mapping(data, path)

    def _decode_any(self, text: str, path: Path) -> Dict[str, Any]:
        """Try each format in fallback order, returning the first mapping."""
        for format_name, decoder in self.fallback_order:
            try:
                data = decoder(text)
            except (yaml.YAMLError, json.JSONDecodeError, tomllib.TOMLDecodeError):
                continue

            if data is None:
                data = {}
            if isinstance(data, dict):
                logger.debug(
                    f"Decoded {path} as {format_name}",
                    extra={"path": str(path), "format": format_name},
                )
                return data

        logger.error(f"Failed to decode config {path}", extra={"path": str(path)})
        raise ConfigParseError(message="failed to decode config", config_file=str(path))

    def _as_mapping(self, data: Any, path: Path) -> Dict[str, Any]:
        if data is None:
            logger.debug(f"Config file is empty: {path}", extra={"path": str(path)})
            return {}

        if not isinstance(data, dict):
            logger.error(
                f"Config file must contain a mapping: {path}",
                extra={"path": str(path), "type": type(data).__name__},
            )
            raise InvalidConfigShapeError(
                message=f"Config must contain a mapping, got {type(data).__name__}",
                config_file=str(path),
                actual_type=type(data).__name__,
            )

        return data

    def encode(self, data: Dict[str, Any], path: Union[str, Path]) -> str:
        """Serialize a dictionary in the format implied by `path`.

        Raises:
            UnsupportedFileTypeError: If the extension is not YAML or JSON
            ConfigEncodeError: If the data cannot be serialized
        """
        path = Path(path)
        encoder = self.encoders.get(path.suffix.lower())
        if encoder is None:
            raise UnsupportedFileTypeError(
                config_file=str(path),
                supported=sorted(self.encoders),
            )

        try:
            return encoder(data)
        except (yaml.YAMLError, TypeError, ValueError) as e:
            raise ConfigEncodeError(
                message=f"Failed to encode configuration: {e}",
                config_file=str(path),
                original_error=e,
            )

    def dump(self, data: Dict[str, Any], path: Union[str, Path]) -> None:
        """Encode `data` and write it to `path` with owner-only permissions.

        Nothing is written if encoding fails.
        """
        path = Path(path)
        content = self.encode(data, path)

        fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, FILE_MODE)
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(content)

        logger.info(
            f"Config file written: {path}",
            extra={"path": str(path), "keys": list(data.keys())},
        )
