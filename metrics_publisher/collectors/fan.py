"""
Fan speed (RPM) reading.

The fan speed comes from a user-supplied command or file, because fan
sensors are exposed very differently across boards. The command takes
precedence; the file is read when no command is set or the command fails.
Every failure degrades to 0 RPM.
"""

import asyncio
from pathlib import Path

from ..config.schema import FanSpeedConfig
from ..logging import get_logger

logger = get_logger("collectors.fan")


def parse_rpm(text: str) -> int:
    """
    Parse an RPM value, ignoring surrounding whitespace.

    Raises:
        ValueError: If text is not a non-negative integer
    """
    value = int(text.strip())
    if value < 0:
        raise ValueError(f"RPM must not be negative: {value}")
    return value


async def read_fan_speed_command(command: str, timeout: float) -> int | None:
    """
    Run a command and parse its stdout as RPM.

    The command is split on whitespace and executed without a shell.

    Returns:
        RPM, or None if the command failed
    """
    args = command.split()
    if not args:
        logger.warning(f"Fan speed command is empty: {command!r}")
        return None

    try:
        proc = await asyncio.create_subprocess_exec(
            *args,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
    except OSError as e:
        logger.warning(f"Failed to execute fan speed command {command!r}: {e}")
        return None

    try:
        stdout, stderr = await asyncio.wait_for(proc.communicate(), timeout=timeout)
    except asyncio.TimeoutError:
        proc.kill()
        await proc.wait()
        logger.warning(f"Fan speed command {command!r} timed out after {timeout}s")
        return None

    if proc.returncode != 0:
        logger.warning(
            f"Fan speed command {command!r} failed with status {proc.returncode}: "
            f"{stderr.decode(errors='replace').strip()}"
        )
        return None

    output = stdout.decode(errors="replace")
    try:
        return parse_rpm(output)
    except ValueError:
        logger.warning(f"Failed to parse fan speed command output {output.strip()!r}")
        return None


def read_fan_speed_file(path: str) -> int | None:
    """
    Read RPM from a file (e.g. /sys/class/hwmon/hwmon2/fan1_input).

    Returns:
        RPM, or None if the file is unreadable or holds no integer
    """
    try:
        content = Path(path).read_text()
    except OSError as e:
        logger.warning(f"Failed to read fan speed file {path!r}: {e}")
        return None

    try:
        return parse_rpm(content)
    except ValueError:
        logger.warning(f"Failed to parse fan speed file {path!r} content {content.strip()!r}")
        return None


async def read_fan_speed(config: FanSpeedConfig) -> int:
    """
    Read the fan speed in RPM.

    Args:
        config: Fan speed source settings

    Returns:
        RPM, or 0 if nothing is configured or every source failed
    """
    if config.command:
        rpm = await read_fan_speed_command(config.command, config.timeout)
        if rpm is not None:
            return rpm

    if config.file:
        rpm = read_fan_speed_file(config.file)
        if rpm is not None:
            return rpm

    logger.warning("Fan speed not configured via command/file or failed to read, using 0 RPM")
    return 0
