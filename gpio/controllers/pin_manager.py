"""
GPIO Manager - Pin Lifecycle State Machine

Owns every exported pin and drives the sysfs protocol for it:

    Unexported -> Exported -> Configured(direction) -> Watching (inputs only)
        ^                                                  |
        +-------------------- destroy ---------------------+

Threading model:
- Public operations resolve the channel on the calling thread, so invalid
  channels fail immediately and never touch sysfs
- The actual I/O is queued on a per-channel worker (ChannelQueue); every
  operation returns a Future and also reports through an optional
  callback(error, result)
- Operations on one pin are strictly ordered, different pins run in
  parallel
- The active pin table and the numbering mode are shared between caller,
  worker and watcher threads and are guarded by one lock
"""

import logging
import threading
from concurrent.futures import Future
from dataclasses import dataclass, replace
from functools import partial
from typing import Any, Callable, Dict, List, Optional, Union

from core.event_bus import EventBus
from gpio.board.revision import BoardIdentifier, BoardInfo
from gpio.constants import (
    CPUINFO_PATH,
    DEFAULT_NUMBERING_MODE,
    SYSFS_GPIO_ROOT,
    WORKER_JOIN_TIMEOUT,
)
from gpio.controllers.channel_resolver import ChannelResolver, normalize_channel
from gpio.controllers.sysfs_gateway import SysfsGateway
from gpio.factory import create_filesystem
from gpio.interfaces.filesystem_interface import FilesystemInterface
from gpio.interfaces.gpio_interface import (
    DirectionError,
    EdgeDetection,
    GPIOError,
    GPIOEvent,
    InvalidEdgeError,
    NumberingMode,
    ParseError,
    PinDirection,
    PinState,
)
from gpio.utils.channel_queue import ChannelQueue
from gpio.utils.gpio_utils import (
    OperationCallback,
    parse_direction,
    parse_edge,
    parse_mode,
    parse_value,
    safe_invoke_callback,
    to_value_string,
)


@dataclass
class ActivePin:
    """One exported and configured GPIO"""

    gpio: int  # Kernel GPIO number (unique key)
    channel: int  # Number the caller used, in the caller's numbering mode
    direction: PinDirection  # IN or OUT
    edge: EdgeDetection = EdgeDetection.NONE
    watching: bool = False  # Value watcher installed (inputs only)


class GPIOManager:
    """
    Exports, configures, watches and releases GPIO pins through sysfs.

    Events (subscribe with on()):
    - "export": channel - a pin finished setup
    - "change": channel, PinState - an input pin changed level
    - "modeChange": NumberingMode - numbering mode was set

    Usage:
        with GPIOManager() as gpio:
            gpio.set_mode(NumberingMode.PHYSICAL)
            gpio.on("change", lambda channel, state: print(channel, state))

            gpio.setup(11, PinDirection.IN, edge=EdgeDetection.BOTH).result()
            gpio.setup(12).result()  # Output by default
            gpio.write(12, 1).result()
            print(gpio.read(11).result())
        # All pins unexported on exit
    """

    def __init__(
        self,
        filesystem: Optional[FilesystemInterface] = None,
        mode: Union[NumberingMode, str, None] = None,
        sysfs_root: str = SYSFS_GPIO_ROOT,
        cpuinfo_path: str = CPUINFO_PATH,
        event_bus: Optional[EventBus] = None,
    ):
        """
        Initialize the manager.

        Args:
            filesystem: Filesystem capability, or None to auto-create
            mode: Initial numbering mode, or None to use configuration
            sysfs_root: Root of the sysfs GPIO tree
            cpuinfo_path: System information source for board detection
            event_bus: Bus to publish on, or None for a private one

        Raises:
            InvalidModeError: If mode is not a recognized token
        """
        self.logger = logging.getLogger(__name__)

        self.filesystem = filesystem or create_filesystem()
        self.gateway = SysfsGateway(self.filesystem, root=sysfs_root)
        self.board_identifier = BoardIdentifier(self.filesystem, cpuinfo_path)
        self.resolver = ChannelResolver(self.board_identifier)
        self.event_bus = event_bus or EventBus()

        self._mode = parse_mode(mode or DEFAULT_NUMBERING_MODE)
        self._active_pins: Dict[int, ActivePin] = {}
        self._lock = threading.RLock()
        self._channel_queue = ChannelQueue()
        self._closed = False

        self.logger.info(
            f"GPIO manager initialized (mode: {self._mode.value}, "
            f"sysfs: {sysfs_root}, real: {self.filesystem.is_available()})",
        )

    # =========================================================================
    # EVENTS
    # =========================================================================

    def on(self, event: Union[GPIOEvent, str], listener: Callable[..., Any]) -> None:
        """Subscribe to "export", "change" or "modeChange" """
        self.event_bus.subscribe(self._event_type(event), listener)

    def off(self, event: Union[GPIOEvent, str], listener: Callable[..., Any]) -> bool:
        """Unsubscribe a listener; returns False if it was not subscribed"""
        return self.event_bus.unsubscribe(self._event_type(event), listener)

    @staticmethod
    def _event_type(event: Union[GPIOEvent, str]) -> GPIOEvent:
        if isinstance(event, GPIOEvent):
            return event
        try:
            return GPIOEvent(event)
        except ValueError as e:
            raise ValueError(f"Unknown GPIO event: {event!r}") from e

    # =========================================================================
    # NUMBERING MODE
    # =========================================================================

    def set_mode(self, mode: Union[NumberingMode, str]) -> None:
        """
        Switch the numbering mode used for every later call.

        Raises:
            InvalidModeError: If mode is not PHYSICAL/VIRTUAL or their token
        """
        new_mode = parse_mode(mode)

        with self._lock:
            self._mode = new_mode

        self.logger.info(f"Numbering mode set to {new_mode.value}")
        self.event_bus.publish(GPIOEvent.MODE_CHANGE, new_mode)

    def get_mode(self) -> NumberingMode:
        with self._lock:
            return self._mode

    @property
    def board(self) -> BoardInfo:
        """
        Detected board, including whether the pin map is a fallback guess.

        Raises:
            ParseError: If the board revision cannot be read
        """
        return self.board_identifier.resolve_board()

    # =========================================================================
    # PIN OPERATIONS
    # =========================================================================

    def setup(
        self,
        channel: Any,
        direction: Union[PinDirection, str, None] = PinDirection.OUT,
        callback: Optional[OperationCallback] = None,
        *,
        edge: Union[EdgeDetection, str, None] = EdgeDetection.NONE,
    ) -> Future:
        """
        Export a channel and configure it.

        A channel left exported by an earlier process is unexported and
        exported again so its direction and ownership start clean.

        Args:
            channel: Channel number in the current numbering mode
            direction: IN, OUT (default), or HIGH/LOW for an output with an
                initial level
            callback: Optional callback(error, None)
            edge: Edge detection for inputs (NONE keeps the kernel default),
                keyword only

        Returns:
            Future resolved once the pin is configured

        Example:
            gpio.setup(7, PinDirection.IN, on_ready)
            gpio.setup(7, PinDirection.IN, edge=EdgeDetection.RISING)
        """
        try:
            gpio = self._resolve(channel)
            pin_direction = parse_direction(direction)
            pin_edge = parse_edge(edge)
            if pin_direction.is_output and pin_edge is not EdgeDetection.NONE:
                raise InvalidEdgeError(
                    f"Edge detection requires an input, channel {channel} "
                    f"is configured as {pin_direction.value}",
                )
        except GPIOError as e:
            return self._fail_immediately(e, callback)

        operation = partial(
            self._setup_pin,
            gpio,
            normalize_channel(channel),
            pin_direction,
            pin_edge,
        )
        return self._submit(gpio, operation, callback)

    def write(
        self,
        channel: Any,
        value: Any,
        callback: Optional[OperationCallback] = None,
    ) -> Future:
        """
        Drive an output pin HIGH (truthy value) or LOW.

        Strings must be a recognized level token ("1"/"0", "high"/"low",
        "true"/"false", "on"/"off"); anything else fails immediately.
        The pin must have been set up as an output; otherwise the operation
        fails with DirectionError.
        """
        try:
            gpio = self._resolve(channel)
            contents = to_value_string(value)
        except GPIOError as e:
            return self._fail_immediately(e, callback)

        return self._submit(gpio, partial(self._write_pin, gpio, contents), callback)

    def read(
        self,
        channel: Any,
        callback: Optional[OperationCallback] = None,
    ) -> Future:
        """
        Read a pin's level (either direction).

        Returns:
            Future resolved with a PinState; callback receives (None, PinState)
        """
        try:
            gpio = self._resolve(channel)
        except GPIOError as e:
            return self._fail_immediately(e, callback)

        return self._submit(gpio, partial(self._read_pin, gpio), callback)

    def destroy(
        self,
        channel: Any,
        callback: Optional[OperationCallback] = None,
    ) -> Future:
        """
        Stop watching and unexport a channel.

        Destroying a channel that is not exported succeeds without touching
        sysfs.
        """
        try:
            gpio = self._resolve(channel)
        except GPIOError as e:
            return self._fail_immediately(e, callback)

        return self._submit(gpio, partial(self._destroy_pin, gpio), callback)

    def destroy_all(self, callback: Optional[OperationCallback] = None) -> Future:
        """
        Destroy every active channel.

        Every pin is attempted; the first error (if any) is reported once
        all of them have finished.
        """
        with self._lock:
            gpios = list(self._active_pins)

        self.logger.info(f"Destroying {len(gpios)} active pins")

        futures = [
            self._channel_queue.submit(gpio, partial(self._destroy_pin, gpio))
            for gpio in gpios
        ]
        return self._gather(futures, callback)

    def reset(self) -> None:
        """
        Forget every active pin and every listener.

        Nothing is unexported: destroy channels first if they should be
        released. Watchers of forgotten pins are removed.
        """
        with self._lock:
            pins = list(self._active_pins.values())
            self._active_pins.clear()

        for pin in pins:
            if pin.watching:
                self._safe_unwatch(pin.gpio)

        self.event_bus.clear()
        self.logger.info(f"GPIO manager reset ({len(pins)} pins forgotten)")

    # =========================================================================
    # STATUS
    # =========================================================================

    def get_active_pins(self) -> List[ActivePin]:
        """Snapshot of the active pins (copies, safe to inspect)"""
        with self._lock:
            return [replace(pin) for pin in self._active_pins.values()]

    def get_status(self) -> Dict[str, Any]:
        """
        Get manager status for diagnostics.

        Returns:
            Dictionary with mode, board, active pins and queue state
        """
        try:
            board: Optional[BoardInfo] = self.board
        except ParseError:
            board = None

        with self._lock:
            active = {
                gpio: {
                    "channel": pin.channel,
                    "direction": pin.direction.value,
                    "edge": pin.edge.value,
                    "watching": pin.watching,
                }
                for gpio, pin in self._active_pins.items()
            }
            mode = self._mode

        return {
            "mode": mode.value,
            "board_revision": board.revision if board else None,
            "board_variant": board.variant.value if board else None,
            "board_is_fallback": board.is_fallback if board else None,
            "real_hardware": self.filesystem.is_available(),
            "active_pins": active,
            "queue": self._channel_queue.get_status(),
        }

    # =========================================================================
    # SHUTDOWN
    # =========================================================================

    def close(self) -> None:
        """
        Stop the channel workers and every watcher.

        Does not unexport anything; use destroy_all() first for that.
        """
        if self._closed:
            return
        self._closed = True

        self._channel_queue.stop()
        try:
            self.filesystem.cleanup()
        except Exception as e:
            # Don't raise - cleanup should be forgiving
            self.logger.warning(f"Error during filesystem cleanup: {e}")

        self.logger.info("GPIO manager closed")

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        try:
            self.destroy_all().result(timeout=WORKER_JOIN_TIMEOUT)
        except Exception as e:
            self.logger.error(f"Error releasing pins on exit: {e}")
        finally:
            self.close()
        return False

    # =========================================================================
    # CHANNEL WORKER TASKS
    # =========================================================================
    # Each of these runs on the channel's worker thread, so they never
    # interleave with another operation on the same GPIO.

    def _setup_pin(
        self,
        gpio: int,
        channel: int,
        direction: PinDirection,
        edge: EdgeDetection,
    ) -> None:
        # A repeated setup replaces the earlier configuration
        with self._lock:
            previous = self._active_pins.pop(gpio, None)
        if previous is not None and previous.watching:
            self._safe_unwatch(gpio)

        if self.gateway.is_exported(gpio):
            self.logger.info(f"GPIO {gpio} already exported, re-exporting")
            self.gateway.unexport(gpio)
        self.gateway.export(gpio)

        self.gateway.set_direction(gpio, direction)

        is_input = direction is PinDirection.IN
        if is_input and edge is not EdgeDetection.NONE:
            self.gateway.set_edge(gpio, edge)

        if is_input:
            self.gateway.watch_value(gpio, partial(self._on_value_change, gpio))

        pin = ActivePin(
            gpio=gpio,
            channel=channel,
            direction=PinDirection.IN if is_input else PinDirection.OUT,
            edge=edge,
            watching=is_input,
        )
        with self._lock:
            self._active_pins[gpio] = pin

        self.logger.info(
            f"Channel {channel} (GPIO {gpio}) set up as {direction.value}"
            + (f", edge {edge.value}" if is_input else ""),
        )
        self.event_bus.publish(GPIOEvent.EXPORT, channel)

    def _write_pin(self, gpio: int, contents: str) -> None:
        pin = self._get_active_pin(gpio)

        if pin is None:
            raise DirectionError(f"GPIO {gpio} has not been set up as an output")
        if pin.direction is not PinDirection.OUT:
            raise DirectionError(
                f"Channel {pin.channel} (GPIO {gpio}) is configured as input",
            )

        # Don't log at info - too verbose for toggling outputs
        self.gateway.write_value(gpio, contents)
        self.logger.debug(f"GPIO {gpio} <- {contents}")

    def _read_pin(self, gpio: int) -> PinState:
        return parse_value(self.gateway.read_value(gpio))

    def _destroy_pin(self, gpio: int) -> None:
        with self._lock:
            pin = self._active_pins.pop(gpio, None)

        if pin is not None and pin.watching:
            self.gateway.unwatch_value(gpio)

        if pin is None and not self.gateway.is_exported(gpio):
            self.logger.debug(f"GPIO {gpio} not exported, nothing to destroy")
            return

        self.gateway.unexport(gpio)
        self.logger.info(f"GPIO {gpio} destroyed")

    # =========================================================================
    # HELPERS
    # =========================================================================

    def _resolve(self, channel: Any) -> int:
        with self._lock:
            mode = self._mode
        return self.resolver.resolve(channel, mode)

    def _get_active_pin(self, gpio: int) -> Optional[ActivePin]:
        with self._lock:
            return self._active_pins.get(gpio)

    def _on_value_change(self, gpio: int, path: str) -> None:
        """Watcher callback: runs on the filesystem's watcher thread"""
        pin = self._get_active_pin(gpio)
        if pin is None:
            # Destroyed or reset while the notification was in flight
            return

        try:
            state = parse_value(self.gateway.read_value(gpio))
        except GPIOError as e:
            self.logger.warning(f"Failed to read {path} after change: {e}")
            return

        self.logger.debug(f"Channel {pin.channel} changed to {state.name}")
        self.event_bus.publish(GPIOEvent.CHANGE, pin.channel, state)

    def _safe_unwatch(self, gpio: int) -> None:
        try:
            self.gateway.unwatch_value(gpio)
        except GPIOError as e:
            self.logger.warning(f"Failed to remove watcher from GPIO {gpio}: {e}")

    def _submit(
        self,
        gpio: int,
        operation: Callable[[], Any],
        callback: Optional[OperationCallback],
    ) -> Future:
        def run():
            try:
                result = operation()
            except Exception as e:
                safe_invoke_callback(callback, e, None, self.logger)
                raise
            safe_invoke_callback(callback, None, result, self.logger)
            return result

        return self._channel_queue.submit(gpio, run)

    def _fail_immediately(
        self,
        error: GPIOError,
        callback: Optional[OperationCallback],
    ) -> Future:
        self.logger.debug(f"Rejected before any I/O: {error}")
        safe_invoke_callback(callback, error, None, self.logger)

        future: Future = Future()
        future.set_exception(error)
        return future

    def _gather(
        self,
        futures: List[Future],
        callback: Optional[OperationCallback],
    ) -> Future:
        """Combine futures into one that reports the first error"""
        combined: Future = Future()
        errors: List[BaseException] = []
        remaining = [len(futures)]
        gather_lock = threading.Lock()

        def finish():
            error = errors[0] if errors else None
            safe_invoke_callback(callback, error, None, self.logger)
            if error is None:
                combined.set_result(None)
            else:
                combined.set_exception(error)

        def on_done(future: Future):
            if future.cancelled():
                error: Optional[BaseException] = GPIOError("Operation cancelled")
            else:
                error = future.exception()

            with gather_lock:
                if error is not None:
                    errors.append(error)
                remaining[0] -= 1
                done = remaining[0] == 0

            if done:
                finish()

        if not futures:
            finish()
        for future in futures:
            future.add_done_callback(on_done)

        return combined
