"""
Encounter logging.

Two outputs share one configuration:

- Console lines: per-module loggers print ``[module] LEVEL: message`` to
  stderr, filtered by a default level and optional per-module overrides.
- Encounter records: structured events (door opened, quest solved,
  monster killed, projectile hit) routed to the sink registered for a
  channel. FileSink appends JSONL, NullSink drops everything.

Usage:
    from adventure.logging import get_logger

    log = get_logger('door')
    log.info("Door at (%d, %d) opened", cx, cy)
    log.event('door_opened', cx=cx, cy=cy)   # DEBUG line + 'encounters' record

Configuration:
    Environment variables (read on import):
        ADVENTURE_LOG_LEVEL=DEBUG                   # Default console level
        ADVENTURE_LOG_MONSTERS=TRACE                # Level for one module
        ADVENTURE_LOG_DIR=/tmp/adventure            # Where record files go
        ADVENTURE_LOGGING_ENCOUNTERS_ENABLED=true   # File sink for a channel

    Or programmatically:
        configure_logging(level='WARNING', modules={'room': 'DEBUG'})
"""

import json
import os
import sys
import time
from abc import ABC, abstractmethod
from enum import IntEnum
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Optional, TextIO

ENCOUNTERS = 'encounters'


class LogLevel(IntEnum):
    """Console levels, numerically compatible with the stdlib's."""
    TRACE = 5
    DEBUG = 10
    INFO = 20
    WARNING = 30
    ERROR = 40
    OFF = 100


_LEVEL_NAMES: Dict[str, LogLevel] = {
    'TRACE': LogLevel.TRACE,
    'DEBUG': LogLevel.DEBUG,
    'INFO': LogLevel.INFO,
    'WARNING': LogLevel.WARNING,
    'WARN': LogLevel.WARNING,
    'ERROR': LogLevel.ERROR,
    'OFF': LogLevel.OFF,
}


def parse_level(name: str) -> LogLevel:
    """Level for a name such as 'debug' or 'WARN'; unknown names give INFO."""
    return _LEVEL_NAMES.get(name.upper(), LogLevel.INFO)


# =============================================================================
# Record sinks
# =============================================================================

class LogSink(ABC):
    """Destination for structured records.

    Subclasses must implement:
        - emit(): Write one record for a channel
        - flush(): Push buffered records out
        - close(): Release resources
    """

    @abstractmethod
    def emit(self, channel: str, record: Dict[str, Any]) -> None:
        """Write a JSON-serialisable record."""
        pass

    @abstractmethod
    def flush(self) -> None:
        pass

    @abstractmethod
    def close(self) -> None:
        pass

    def __enter__(self) -> 'LogSink':
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()


class FileSink(LogSink):
    """Appends records to one JSONL file per channel.

    Each file opens with a header line and, on close(), ends with a
    footer line.

    Args:
        log_dir: Directory for the files (default: get_log_dir())
        session_name: File name prefix (default: start timestamp)
    """

    def __init__(self, log_dir: Optional[str] = None, session_name: Optional[str] = None):
        self._log_dir = Path(log_dir) if log_dir else Path(get_log_dir())
        self._session = session_name or time.strftime("%Y%m%d_%H%M%S")
        self._handles: Dict[str, TextIO] = {}

    def path_for(self, channel: str) -> Path:
        return self._log_dir / f"{self._session}_{channel}.jsonl"

    def _handle(self, channel: str) -> TextIO:
        handle = self._handles.get(channel)
        if handle is None:
            self._log_dir.mkdir(parents=True, exist_ok=True)
            handle = open(self.path_for(channel), 'a')
            self._handles[channel] = handle
            self._write(handle, {'type': 'header', 'channel': channel,
                                 'session': self._session, 'opened_at': time.time()})
        return handle

    @staticmethod
    def _write(handle: TextIO, record: Dict[str, Any]) -> None:
        handle.write(json.dumps(record, default=str) + "\n")

    def emit(self, channel: str, record: Dict[str, Any]) -> None:
        self._write(self._handle(channel), {'wall_time': time.time(), **record})

    def flush(self) -> None:
        for handle in self._handles.values():
            handle.flush()

    def close(self) -> None:
        for channel, handle in self._handles.items():
            self._write(handle, {'type': 'footer', 'channel': channel, 'closed_at': time.time()})
            handle.close()
        self._handles.clear()

    @property
    def log_paths(self) -> Dict[str, Path]:
        """Files opened so far, by channel."""
        return {channel: self.path_for(channel) for channel in self._handles}


class NullSink(LogSink):
    """Discards every record."""

    def emit(self, channel: str, record: Dict[str, Any]) -> None:
        pass

    def flush(self) -> None:
        pass

    def close(self) -> None:
        pass


_sinks: Dict[str, LogSink] = {}


def register_sink(channel: str, sink: LogSink) -> None:
    """Route a channel's records to `sink`, replacing any previous one."""
    _sinks[channel] = sink


def get_sink(channel: str) -> Optional[LogSink]:
    return _sinks.get(channel)


def emit_record(channel: str, record: Dict[str, Any]) -> bool:
    """Send a record to the channel's sink.

    Returns:
        False if no sink is registered for the channel
    """
    sink = _sinks.get(channel)
    if sink is None:
        return False
    sink.emit(channel, record)
    return True


def close_all_sinks() -> None:
    """Close and unregister every sink."""
    for sink in _sinks.values():
        sink.close()
    _sinks.clear()


def create_sink(channel: str, session_name: Optional[str] = None) -> LogSink:
    """Sink configured for a channel.

    A FileSink when ADVENTURE_LOGGING_<CHANNEL>_ENABLED is set (its
    directory overridable with ADVENTURE_LOGGING_<CHANNEL>_DIR),
    otherwise a NullSink.
    """
    settings = _config['modules'].get(channel.lower(), {})
    if not settings.get('enabled', False):
        return NullSink()
    return FileSink(log_dir=settings.get('dir'), session_name=session_name)


# =============================================================================
# Configuration
# =============================================================================

_LEVEL_PREFIX = 'ADVENTURE_LOG_'
_CHANNEL_PREFIX = 'ADVENTURE_LOGGING_'
_RESERVED = ('ADVENTURE_LOG_LEVEL', 'ADVENTURE_LOG_DIR')

_config: Dict[str, Any] = {
    'default_level': LogLevel.INFO,
    'module_levels': {},     # module -> LogLevel
    'log_dir': None,
    'modules': {},           # channel -> {'enabled': bool, 'dir': str}
}


def get_log_dir() -> str:
    """Record directory: ADVENTURE_LOG_DIR, else the XDG data directory."""
    if _config['log_dir']:
        return str(Path(_config['log_dir']).expanduser())
    data_home = os.environ.get('XDG_DATA_HOME') or str(Path.home() / '.local' / 'share')
    return str(Path(data_home) / 'adventure' / 'logs')


def configure_logging(level: str = 'INFO', modules: Optional[Dict[str, str]] = None) -> None:
    """Set the default console level and per-module overrides.

    Args:
        level: Default level name
        modules: module name -> level name
    """
    _config['default_level'] = parse_level(level)
    for module, module_level in (modules or {}).items():
        _config['module_levels'][module.lower()] = parse_level(module_level)


def _env_value(value: str) -> Any:
    lowered = value.lower()
    if lowered in ('1', 'true', 'yes', 'on'):
        return True
    if lowered in ('0', 'false', 'no', 'off'):
        return False
    return value


def _load_env_config() -> None:
    env = os.environ
    if 'ADVENTURE_LOG_LEVEL' in env:
        _config['default_level'] = parse_level(env['ADVENTURE_LOG_LEVEL'])
    if 'ADVENTURE_LOG_DIR' in env:
        _config['log_dir'] = env['ADVENTURE_LOG_DIR']

    for key, value in env.items():
        if key.startswith(_CHANNEL_PREFIX):
            channel, _, setting = key[len(_CHANNEL_PREFIX):].lower().partition('_')
            if channel and setting:
                _config['modules'].setdefault(channel, {})[setting] = _env_value(value)
        elif key.startswith(_LEVEL_PREFIX) and key not in _RESERVED:
            _config['module_levels'][key[len(_LEVEL_PREFIX):].lower()] = parse_level(value)


_load_env_config()


# =============================================================================
# Loggers
# =============================================================================

class AdventureLogger:
    """Console logger for one module, plus encounter events."""

    def __init__(self, module: str):
        self.module = module
        self._key = module.lower().replace('.', '_')

    def __repr__(self) -> str:
        return f"AdventureLogger({self.module!r}, level={self.level.name})"

    @property
    def level(self) -> LogLevel:
        return _config['module_levels'].get(self._key, _config['default_level'])

    def enabled_for(self, level: LogLevel) -> bool:
        return level >= self.level

    def _log(self, level: LogLevel, label: str, msg: str, *args: Any) -> None:
        if not self.enabled_for(level):
            return
        if args:
            try:
                msg = msg % args
            except (TypeError, ValueError):
                msg = f"{msg} {args}"
        print(f"[{self.module}] {label}: {msg}", file=sys.stderr)

    def trace(self, msg: str, *args: Any) -> None:
        self._log(LogLevel.TRACE, 'TRACE', msg, *args)

    def debug(self, msg: str, *args: Any) -> None:
        self._log(LogLevel.DEBUG, 'DEBUG', msg, *args)

    def info(self, msg: str, *args: Any) -> None:
        self._log(LogLevel.INFO, 'INFO', msg, *args)

    def warning(self, msg: str, *args: Any) -> None:
        self._log(LogLevel.WARNING, 'WARN', msg, *args)

    def error(self, msg: str, *args: Any) -> None:
        self._log(LogLevel.ERROR, 'ERROR', msg, *args)

    def event(self, name: str, **fields: Any) -> bool:
        """Log an encounter event and emit it on the 'encounters' channel.

        Returns:
            True if a sink received the record
        """
        if self.enabled_for(LogLevel.DEBUG):
            details = ', '.join(f"{k}={v!r}" for k, v in fields.items())
            self._log(LogLevel.DEBUG, 'EVENT', "%s(%s)", name, details)
        return emit_record(ENCOUNTERS, {'type': name, 'source': self.module, **fields})


@lru_cache(maxsize=64)
def get_logger(module: str) -> AdventureLogger:
    """Cached logger for a module: one instance per name."""
    return AdventureLogger(module)
