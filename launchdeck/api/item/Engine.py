"""Reconciliation engine - keeps the launch item list in step with launchctl."""

import asyncio
import functools
import os
import shutil
import tempfile
import uuid
from contextlib import suppress
from pathlib import Path

from ...logging_config import get_logger
from ..config.LaunchdeckConfig import LaunchdeckConfig
from ..document.DocumentError import InvalidFormat
from ..document.EditSession import EditSession
from ..document.PlistDocument import PlistDocument
from ..gateway.AuthenticationError import AuthenticationError
from ..gateway.CommandRunner import CommandRunner
from ..gateway.PrivilegedRunner import PrivilegedRunner
from ..gateway.run_command import run_command
from .EngineError import CommandFailure, CopyFailed, EngineError, IOFailure, ReplaceConfirmationRequired
from .InstallResult import InstallResult
from .Scope import Scope
from .ServiceItem import ServiceItem
from .StatusProber import LAUNCHCTL, StatusProber
from .filter_items import filter_items
from .scan_scope import ScopeDiagnostic, inspect_scope_directory, probe_item, scan_scope

logger = get_logger("engine")

RM = "/bin/rm"


class Engine:
    """Owner of the launch item list.

    All list mutations happen in the engine's coroutines, on the event loop
    that awaits them. Blocking work (launchctl, file I/O) runs in worker
    threads through ``asyncio.to_thread`` and only hands results back; no
    worker touches the list. A per-item lock serializes transitions on the
    same item.

    A failed transition leaves the item as last probed, records
    ``error_message`` and returns False.
    """

    def __init__(
        self,
        direct: CommandRunner,
        privileged: CommandRunner,
        directories: dict[Scope, Path] | None = None,
        launchctl: str = LAUNCHCTL,
        rm: str = RM,
        uid: int | None = None,
        auto_refresh_after_install: bool = True,
    ):
        self.direct = direct
        self.privileged = privileged
        self.launchctl = launchctl
        self.rm = rm
        self.prober = StatusProber(direct, launchctl=launchctl, uid=uid)
        self.directories = {scope: scope.directory for scope in Scope}
        self.directories.update(directories or {})
        self.auto_refresh_after_install = auto_refresh_after_install

        self.items: list[ServiceItem] = []
        self.scan_errors: list[str] = []
        self.error_message: str | None = None

        self._locks: dict[uuid.UUID, asyncio.Lock] = {}
        self._lock_loop: asyncio.AbstractEventLoop | None = None

    @classmethod
    def from_config(cls, config: LaunchdeckConfig) -> "Engine":
        gateway = config.gateway
        timeout = gateway.command_timeout_secs
        return cls(
            direct=functools.partial(run_command, timeout=timeout),
            privileged=PrivilegedRunner(gateway.osascript_path, timeout=timeout),
            directories={scope: config.scopes.directory_for(scope) for scope in Scope},
            launchctl=gateway.launchctl_path,
            rm=gateway.rm_path,
        )

    # Queries

    def directory_for(self, scope: Scope) -> Path:
        return self.directories[scope]

    def filtered(self, scope: Scope | None = None, search: str = "") -> list[ServiceItem]:
        return filter_items(self.items, scope=scope, search=search)

    def find(self, key: str) -> ServiceItem | None:
        """Look an item up by label, then by display name, then by file path."""
        for matches in (
            lambda item: item.label == key,
            lambda item: item.display_name == key,
            lambda item: str(item.path) == key,
        ):
            found = [item for item in self.items if matches(item)]
            if found:
                return filter_items(found)[0]
        return None

    def user_agent_exists(self, file_name: str) -> bool:
        return (self.directory_for(Scope.USER_AGENT) / file_name).exists()

    def diagnose(self) -> list[ScopeDiagnostic]:
        return [inspect_scope_directory(scope, self.directory_for(scope)) for scope in Scope]

    # Bulk refresh

    async def refresh(self) -> list[ServiceItem]:
        """Rescan every scope and replace the item list."""
        self.error_message = None
        self.scan_errors = []

        outcomes = await asyncio.gather(
            *(scan_scope(scope, self.directory_for(scope), self.prober) for scope in Scope),
            return_exceptions=True,
        )

        items: list[ServiceItem] = []
        scope_errors: list[str] = []
        for scope, outcome in zip(Scope, outcomes):
            if isinstance(outcome, OSError):
                message = f"Failed to load {scope.title}: {outcome}"
                logger.error(message)
                scope_errors.append(message)
                continue
            if isinstance(outcome, BaseException):
                raise outcome
            items.extend(outcome.items)
            self.scan_errors.extend(outcome.errors)
        self.scan_errors.extend(scope_errors)

        self.items = items
        self._locks = {}
        if scope_errors and not items:
            self.error_message = "; ".join(scope_errors)
        logger.info("Refresh complete: %d item(s), %d error(s)", len(items), len(self.scan_errors))
        return self.items

    # Transitions

    async def load(self, item: ServiceItem) -> bool:
        domain = self.prober.domain(item.scope)
        return await self._transition(item, "load", ["bootstrap", domain, str(item.path)])

    async def unload(self, item: ServiceItem) -> bool:
        return await self._transition(item, "unload", ["bootout", self._target(item)])

    async def enable(self, item: ServiceItem) -> bool:
        return await self._transition(item, "enable", ["enable", self._target(item)])

    async def disable(self, item: ServiceItem) -> bool:
        return await self._transition(item, "disable", ["disable", self._target(item)])

    async def reload(self, item: ServiceItem) -> bool:
        """Unload then load, so launchd picks up an edited definition."""
        async with self._lock_for(item):
            unloaded = False
            try:
                if item.is_loaded:
                    await self._launchctl(item, ["bootout", self._target(item)])
                    unloaded = True
                await self._launchctl(item, ["bootstrap", self.prober.domain(item.scope), str(item.path)])
            except (EngineError, AuthenticationError) as e:
                self._report(f"Failed to reload {item.display_name}: {e}")
                if unloaded:
                    # The unload did happen; record it rather than the stale state
                    await self._update_item_status(item)
                return False
            await self._update_item_status(item)
            return True

    async def delete(self, item: ServiceItem) -> bool:
        """Unload if loaded, remove the file, then drop the item from the list."""
        async with self._lock_for(item):
            unloaded = False
            try:
                if item.is_loaded:
                    try:
                        await self._launchctl(item, ["bootout", self._target(item)])
                        unloaded = True
                    except CommandFailure as e:
                        logger.warning("Unload before delete failed for %s: %s", item.label, e)
                await self._remove_file(item)
            except (EngineError, AuthenticationError) as e:
                self._report(f"Failed to delete {item.display_name}: {e}")
                if unloaded:
                    await self._update_item_status(item)
                return False
            self.items = [existing for existing in self.items if existing.id != item.id]
            self._locks.pop(item.id, None)
            logger.info("Deleted %s", item.path)
            return True

    # Editing

    def open_editor(self, item: ServiceItem) -> EditSession:
        """Open an edit session on the item's file; only user agents are writable.

        Raises:
            OSError: If the file cannot be read
            DocumentError: If the file no longer parses
        """
        return EditSession.open(item.path, editable=item.scope is Scope.USER_AGENT)

    # Install

    async def install_user_agent(
        self,
        source: Path,
        enable_and_start: bool = False,
        replace: bool = False,
    ) -> InstallResult:
        """Copy a definition into the user agents directory.

        The optional enable-and-start follow-up is best effort: its failures
        become warnings on the result and never undo the copy.

        Raises:
            InvalidFormat, MissingIdentifier: If ``source`` is not a valid definition
            ReplaceConfirmationRequired: If the destination exists and ``replace`` is False
            CopyFailed: If the file could not be copied
        """
        source = Path(source)
        label = await asyncio.to_thread(validate_definition, source)

        destination_dir = self.directory_for(Scope.USER_AGENT)
        destination = destination_dir / source.name
        existed = destination.exists()
        if existed and not replace:
            raise ReplaceConfirmationRequired(destination)

        try:
            await asyncio.to_thread(_copy_definition, source, destination)
        except OSError as e:
            raise CopyFailed(str(e)) from e
        logger.info("Installed %s to %s", source.name, destination)

        result = InstallResult(label=label, path=destination, replaced=existed)
        if enable_and_start:
            domain = self.prober.domain(Scope.USER_AGENT)
            ok, output = await self._execute(Scope.USER_AGENT, self.launchctl, ["enable", f"{domain}/{label}"])
            if not ok:
                result.warnings.append(f"enable failed: {output.strip()}")
            ok, output = await self._execute(Scope.USER_AGENT, self.launchctl, ["bootstrap", domain, str(destination)])
            if not ok:
                result.warnings.append(f"start failed: {output.strip()}")
            result.started = not result.warnings

        if self.auto_refresh_after_install:
            await self.refresh()

        if result.warnings:
            self._report(f"Agent copied but {'; '.join(result.warnings)}", warning=True)
        return result

    # Internals

    def _target(self, item: ServiceItem) -> str:
        return f"{self.prober.domain(item.scope)}/{item.label}"

    def _lock_for(self, item: ServiceItem) -> asyncio.Lock:
        loop = asyncio.get_running_loop()
        if loop is not self._lock_loop:
            self._lock_loop = loop
            self._locks = {}
        return self._locks.setdefault(item.id, asyncio.Lock())

    def _report(self, message: str, warning: bool = False) -> None:
        if warning:
            logger.warning(message)
        else:
            logger.error(message)
        self.error_message = message

    async def _execute(self, scope: Scope, command: str, arguments: list[str]) -> tuple[bool, str]:
        """Run a command on the channel the scope requires, off the event loop."""
        runner = self.privileged if scope.requires_privilege else self.direct
        return await asyncio.to_thread(runner, command, arguments)

    async def _launchctl(self, item: ServiceItem, arguments: list[str]) -> str:
        ok, output = await self._execute(item.scope, self.launchctl, arguments)
        if not ok:
            raise CommandFailure(self.launchctl, arguments, output)
        return output

    async def _transition(self, item: ServiceItem, verb: str, arguments: list[str]) -> bool:
        async with self._lock_for(item):
            try:
                await self._launchctl(item, arguments)
            except (CommandFailure, AuthenticationError) as e:
                self._report(f"Failed to {verb} {item.display_name}: {e}")
                return False
            logger.info("%s %s", verb.capitalize(), item.label)
            await self._update_item_status(item)
            return True

    async def _remove_file(self, item: ServiceItem) -> None:
        if item.requires_privilege:
            ok, output = await self._execute(item.scope, self.rm, ["-f", str(item.path)])
            if not ok:
                raise CommandFailure(self.rm, ["-f", str(item.path)], output)
            return
        try:
            await asyncio.to_thread(item.path.unlink, missing_ok=True)
        except OSError as e:
            raise IOFailure(str(e)) from e

    async def _update_item_status(self, item: ServiceItem) -> None:
        status, loaded, enabled = await probe_item(self.prober, item.label, item.scope)
        # Re-resolve after the await: the list may have been replaced meanwhile
        current = next((existing for existing in self.items if existing.id == item.id), None)
        if current is None:
            return
        current.apply_probe(status, loaded, enabled)


def validate_definition(path: Path) -> str:
    """Check that ``path`` holds a definition with a label and return the label.

    Raises:
        InvalidFormat: If the file cannot be read or is not a property list
        MissingIdentifier: If it has no Label key
    """
    try:
        data = path.read_bytes()
    except OSError as e:
        raise InvalidFormat(f"{path.name}: {e}") from e
    try:
        return PlistDocument.parse(data).label
    except InvalidFormat as e:
        raise InvalidFormat(f"{path.name}: {e.detail}") from e


def _copy_definition(source: Path, destination: Path) -> None:
    """Copy through a temporary file in the destination directory, then swap it in.

    An existing destination stays intact until the swap. Copying a file onto
    itself does nothing.
    """
    destination.parent.mkdir(parents=True, exist_ok=True)
    if destination.exists() and os.path.samefile(source, destination):
        logger.info("%s is already installed in place", destination)
        return
    fd, temp_name = tempfile.mkstemp(prefix=f".{destination.name}.", suffix=".tmp", dir=destination.parent)
    os.close(fd)
    try:
        shutil.copyfile(source, temp_name)
        shutil.copymode(destination if destination.exists() else source, temp_name)
        os.replace(temp_name, destination)
    except BaseException:
        with suppress(OSError):
            os.unlink(temp_name)
        raise
