"""Edit (changeset) lifecycle.

An edit is a pending batch of changes held by the store and referenced only
by its id. ``EditSession`` carries that id through the run:

    ABSENT --obtain--> PENDING --commit--> COMMITTED

Nothing about the edit's content is cached locally. Create and commit are
never retried: repeating either blindly could leave duplicate pending edits
or commit twice.
"""

from __future__ import annotations

from enum import Enum, auto

from playpub.core.result import Err, Ok, Result
from playpub.core.structured import as_str_dict, get_list, get_str
from playpub.output.console import ConsoleProtocol
from playpub.services.publish.errors import PublishError, RemoteRejection, TrackNotFound
from playpub.store.api import StoreApi


class EditState(Enum):
    ABSENT = auto()
    PENDING = auto()
    COMMITTED = auto()


class EditSession:
    def __init__(self, *, api: StoreApi, package_name: str, console: ConsoleProtocol) -> None:
        self.api = api
        self.package_name = package_name
        self.console = console
        self.state = EditState.ABSENT
        self._edit_id: str | None = None

    @property
    def edit_id(self) -> str:
        if self._edit_id is None:
            raise RuntimeError("no edit has been obtained")
        return self._edit_id

    def _require(self, state: EditState, action: str) -> None:
        if self.state is not state:
            raise RuntimeError(f"cannot {action}: edit is {self.state.name.lower()}")

    def obtain(self, existing_edit_id: str | None = None) -> Result[str, PublishError]:
        """Reuse ``existing_edit_id`` or create a new edit."""
        self._require(EditState.ABSENT, "obtain an edit")

        if existing_edit_id:
            self.console.info(f"Using existing Edit {existing_edit_id}")
            self._edit_id = existing_edit_id
            self.state = EditState.PENDING
            return Ok(existing_edit_id)

        self.console.info("Creating a new Edit for this release")
        result = self.api.create_edit(self.package_name)
        if isinstance(result, Err):
            return Err(RemoteRejection.from_http("create edit", result.error))

        edit_id = get_str(result.value, "id")
        if edit_id is None:
            return Err(
                RemoteRejection(
                    operation="create edit",
                    status=None,
                    message="New edit has no ID, cannot continue.",
                )
            )

        expiry = get_str(result.value, "expiryTimeSeconds")
        self.console.debug(f"This new edit expires at {expiry}")
        self._edit_id = edit_id
        self.state = EditState.PENDING
        return Ok(edit_id)

    def validate_track(self, track: str) -> Result[None, PublishError]:
        """Fail fast if ``track`` is not one of the app's tracks."""
        self._require(EditState.PENDING, "validate track")
        self.console.info(f"Validating track '{track}'")

        result = self.api.list_tracks(self.package_name, self.edit_id)
        if isinstance(result, Err):
            return Err(RemoteRejection.from_http("list tracks", result.error))

        tracks = get_list(result.value, "tracks")
        if tracks is None:
            return Err(
                RemoteRejection(
                    operation="list tracks",
                    status=None,
                    message="No tracks found, unable to validate track.",
                )
            )

        names: list[str] = []
        for item in tracks:
            entry = as_str_dict(item)
            name = get_str(entry, "track") if entry is not None else None
            if name is not None:
                names.append(name)

        if track not in names:
            return Err(TrackNotFound(track=track, available=tuple(names)))
        return Ok(None)

    def commit(self, *, changes_not_sent_for_review: bool = False) -> Result[str, PublishError]:
        """Commit the edit; returns the committed edit id."""
        self._require(EditState.PENDING, "commit")
        self.console.info("Committing the Edit")

        result = self.api.commit_edit(
            self.package_name,
            self.edit_id,
            changes_not_sent_for_review=changes_not_sent_for_review,
        )
        if isinstance(result, Err):
            return Err(RemoteRejection.from_http("commit edit", result.error))

        committed_id = get_str(result.value, "id")
        if committed_id is None:
            return Err(
                RemoteRejection(
                    operation="commit edit",
                    status=None,
                    message="Commit response has no edit ID.",
                )
            )

        self.state = EditState.COMMITTED
        self.console.success(f"Successfully committed {committed_id}")
        return Ok(committed_id)
