"""
File Backend

Text or JSON lines, rotated by size. Without a running event loop each
record is appended immediately. Inside a loop (start() and sequential runs
on the aiohttp transport) records are buffered and appended by a background
task through aiofiles, so the loop never blocks on disk I/O.
"""

import asyncio
import json
from datetime import datetime
from pathlib import Path
from typing import List, Optional

import aiofiles
import aiofiles.os

from ..interfaces import LogBackend, LogLevel, LogRecord, LogType
from ..structs import FileBackendConfig


class FileBackend(LogBackend):

    def __init__(self, config: FileBackendConfig, name: str = "file"):
        if not isinstance(config, FileBackendConfig):
            raise TypeError(f"Expected FileBackendConfig, got {type(config)}")
        super().__init__(name, LogLevel[config.min_level.upper()], config.enabled)

        self.config = config
        self.file_path = Path(config.path)
        self.max_file_size = config.max_size_mb * 1024 * 1024

        self._buffer: List[str] = []
        self._flush_task: Optional[asyncio.Task] = None

        if self.enabled:
            self.file_path.parent.mkdir(parents=True, exist_ok=True)

    def write(self, record: LogRecord) -> None:
        if self.config.format == 'json':
            self._buffer.append(self._format_json(record))
        else:
            self._buffer.append(self._format_text(record))

        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            self.flush()
            return

        if self._flush_task is None or self._flush_task.done():
            self._flush_task = loop.create_task(self._flush_async())

    def flush(self) -> None:
        """Append buffered lines with blocking I/O."""
        if not self._buffer:
            return
        lines = list(self._buffer)
        try:
            self._rotate_if_needed()
            with open(self.file_path, 'a', encoding='utf-8') as f:
                f.write(''.join(line + '\n' for line in lines))
        except OSError as e:
            self._handle_error(e)
            return
        del self._buffer[:len(lines)]

    async def drain(self) -> None:
        """Wait for the background writer and append anything still buffered."""
        if self._flush_task is not None and not self._flush_task.done():
            await self._flush_task
        await self._flush_async()

    async def _flush_async(self) -> None:
        while self._buffer:
            lines = list(self._buffer)
            try:
                await self._rotate_if_needed_async()
                async with aiofiles.open(self.file_path, 'a', encoding='utf-8') as f:
                    await f.write(''.join(line + '\n' for line in lines))
            except OSError as e:
                self._handle_error(e)
                return
            # Records written meanwhile stay queued for the next pass
            del self._buffer[:len(lines)]

    def _backup_path(self, index: int) -> Path:
        return self.file_path.with_suffix(f'.{index}')

    def _rotate_if_needed(self) -> None:
        if not self.file_path.exists() or self.file_path.stat().st_size < self.max_file_size:
            return
        for i in range(self.config.backup_count - 1, 0, -1):
            if self._backup_path(i).exists():
                self._backup_path(i).replace(self._backup_path(i + 1))
        if self.config.backup_count == 0:
            self.file_path.unlink()
        else:
            self.file_path.replace(self._backup_path(1))

    async def _rotate_if_needed_async(self) -> None:
        if not await aiofiles.os.path.exists(self.file_path):
            return
        if await aiofiles.os.path.getsize(self.file_path) < self.max_file_size:
            return
        for i in range(self.config.backup_count - 1, 0, -1):
            if await aiofiles.os.path.exists(self._backup_path(i)):
                await aiofiles.os.replace(self._backup_path(i), self._backup_path(i + 1))
        if self.config.backup_count == 0:
            await aiofiles.os.remove(self.file_path)
        else:
            await aiofiles.os.replace(self.file_path, self._backup_path(1))

    def _format_text(self, record: LogRecord) -> str:
        timestamp = datetime.fromtimestamp(record.timestamp).isoformat()
        pairs = ", ".join(f"{k}={v}" for k, v in record.context.items())

        if record.log_type == LogType.METRIC:
            line = f"[{timestamp}] METRIC {record.logger_name}: {record.metric_name}={record.metric_value}"
        else:
            line = f"[{timestamp}] {record.level.name} {record.logger_name}: {record.message}"
        return f"{line} | {pairs}" if pairs else line

    def _format_json(self, record: LogRecord) -> str:
        data = {
            'timestamp': record.timestamp,
            'level': record.level.name,
            'type': record.log_type.name,
            'logger': record.logger_name,
        }
        if record.log_type == LogType.METRIC:
            data['metric'] = {'name': record.metric_name, 'value': record.metric_value}
        else:
            data['message'] = record.message
        if record.context:
            data['context'] = record.context
        return json.dumps(data, separators=(',', ':'), default=str)
