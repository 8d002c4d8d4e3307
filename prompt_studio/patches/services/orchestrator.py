import json
import logging
from collections.abc import Sequence
from typing import Any

from pydantic import TypeAdapter

from prompt_studio.diffs.services import DiffService
from prompt_studio.patches.applier import HunkApplier
from prompt_studio.patches.constants import PATCH_PROMPT_TEMPLATE
from prompt_studio.patches.enums import (
    ApplyStatus,
    PatchIntent,
    PatchOperationType,
    PatchTerminalState,
)
from prompt_studio.patches.generator import GeneratorReply, PatchGenerator
from prompt_studio.patches.parser import PatchParser
from prompt_studio.patches.schemas import (
    AppliedHunks,
    ApplyOutcome,
    PatchOperationCall,
    PatchRound,
    PatchRunResult,
)

logger = logging.getLogger(__name__)

DEFAULT_MAX_PATCH_ATTEMPTS = 5
DEFAULT_TARGET_NAME = "system_prompt.txt"

failure_modes_adapter = TypeAdapter(list[Any])


class PatchOrchestrator:
    """
    Drives the apply/report/retry loop against the generator.

    Each round applies the generator's operations in order over a working copy
    of the document, then commits the working copy. Failed operations are sent
    back as tool outputs so the generator can correct them, for at most
    `max_attempts` rounds.
    """

    def __init__(
        self,
        *,
        generator: PatchGenerator,
        diff_service: DiffService,
        parser: PatchParser,
        applier: HunkApplier,
        target_name: str = DEFAULT_TARGET_NAME,
        max_attempts: int = DEFAULT_MAX_PATCH_ATTEMPTS,
    ):
        self.generator = generator
        self.diff_service = diff_service
        self.parser = parser
        self.applier = applier
        self.target_name = target_name
        self.max_attempts = max_attempts

    def build_prompt(self, document: str, plan: Sequence[str], failure_modes: Sequence[Any] = ()) -> str:
        return PATCH_PROMPT_TEMPLATE.format(
            target_name=self.target_name,
            document=document,
            failure_modes=json.dumps(
                failure_modes_adapter.dump_python(list(failure_modes), mode="json", by_alias=True), indent=2
            ),
            patch_notes=json.dumps(list(plan), indent=2),
        )

    async def run(
        self,
        document: str,
        plan: Sequence[str],
        *,
        failure_modes: Sequence[Any] = (),
        max_attempts: int | None = None,
    ) -> PatchRunResult:
        attempts = self.max_attempts if max_attempts is None else max_attempts
        logger.info("Patching %s with %s patch note(s), up to %s round(s)", self.target_name, len(plan), attempts)
        if attempts < 1:
            logger.error("No patch rounds allowed (max_attempts=%s)", attempts)
            return PatchRunResult(
                revised_document=document,
                outcomes=(),
                terminal=PatchTerminalState.EXHAUSTED,
                rounds=(),
            )

        reply = await self.generator.propose(self.build_prompt(document, plan, failure_modes))
        current = document
        rounds: list[PatchRound] = []
        completed = False
        all_failed = False

        for round_index in range(attempts):
            if not reply.operations:
                logger.error("No apply_patch calls in generator reply (round %s)", round_index)
                break

            current, outcomes = self._apply_round(current, reply)
            rounds.append(PatchRound(index=round_index, outcomes=outcomes))

            failed = [outcome for outcome in outcomes if outcome.failed]
            if not failed:
                completed = True
                break

            logger.warning(
                "Round %s: %s of %s apply_patch call(s) failed", round_index, len(failed), len(outcomes)
            )
            if round_index == attempts - 1:
                break

            linkable = [outcome for outcome in outcomes if outcome.call_id]
            if not linkable:
                all_failed = round_index == 0 and len(failed) == len(outcomes)
                logger.error("No call ids to report failures against, giving up after round %s", round_index)
                break

            reply = await self.generator.repair(reply, linkable)

        last_outcomes = rounds[-1].outcomes if rounds else ()

        if all_failed:
            terminal = PatchTerminalState.ALL_FAILED
            revised = document
        elif not completed:
            terminal = PatchTerminalState.EXHAUSTED
            revised = current
        elif current.strip() == document.strip():
            logger.warning("apply_patch produced no effective change")
            terminal = PatchTerminalState.NO_CHANGE
            revised = document
        else:
            terminal = PatchTerminalState.COMPLETED
            revised = current

        logger.info("Patch run finished: %s after %s round(s)", terminal, len(rounds))
        return PatchRunResult(
            revised_document=revised,
            outcomes=last_outcomes,
            terminal=terminal,
            rounds=tuple(rounds),
        )

    async def run_per_note(
        self,
        document: str,
        plan: Sequence[str],
        *,
        failure_modes: Sequence[Any] = (),
        max_attempts: int | None = None,
    ) -> PatchRunResult:
        """Runs one orchestration per note, each starting from the document the previous note left."""
        current = document
        rounds: list[PatchRound] = []
        outcomes: tuple[ApplyOutcome, ...] = ()

        for note_index, note in enumerate(plan):
            result = await self.run(current, [note], failure_modes=failure_modes, max_attempts=max_attempts)
            rounds.extend(result.rounds)
            outcomes = result.outcomes
            if result.terminal not in (PatchTerminalState.COMPLETED, PatchTerminalState.NO_CHANGE):
                logger.warning("Patch note %s ended with %s, stopping", note_index, result.terminal)
                return result.model_copy(update={"rounds": tuple(rounds)})
            current = result.revised_document

        if current.strip() == document.strip():
            return PatchRunResult(
                revised_document=document,
                outcomes=outcomes,
                terminal=PatchTerminalState.NO_CHANGE,
                rounds=tuple(rounds),
            )
        return PatchRunResult(
            revised_document=current,
            outcomes=outcomes,
            terminal=PatchTerminalState.COMPLETED,
            rounds=tuple(rounds),
        )

    def _apply_round(self, document: str, reply: GeneratorReply) -> tuple[str, tuple[ApplyOutcome, ...]]:
        working = document
        outcomes: list[ApplyOutcome] = []
        for call in reply.operations:
            working, outcome = self._apply_call(working, call)
            if outcome.failed:
                logger.error("apply_patch call %s failed: %s", call.call_id, outcome.message)
            outcomes.append(outcome)
        return working, tuple(outcomes)

    def _apply_call(self, working: str, call: PatchOperationCall) -> tuple[str, ApplyOutcome]:
        operation = call.operation
        if operation is None:
            return working, self._failed(call, call.decode_error or "Unsupported apply_patch operation")

        if not self._is_permitted_target(operation.path):
            return working, self._failed(
                call, f"Invalid or disallowed path in apply_patch operation: {operation.path}"
            )

        kind = call.operation_type
        if kind == PatchOperationType.DELETE_FILE:
            return working, self._failed(call, f"delete_file is not supported for {self.target_name}")

        if not operation.diff.strip():
            return working, self._failed(call, f"{kind} missing diff content")

        if kind == PatchOperationType.CREATE_FILE:
            base, intent = "", PatchIntent.CREATE
        else:
            base, intent = working, PatchIntent.UPDATE

        logger.debug("Applying %s diff (len=%s): %s", kind, len(operation.diff), operation.diff[:200])
        result = self.applier.apply(base, self.parser.parse(operation.diff), intent)
        if not isinstance(result, AppliedHunks):
            return working, self._failed(call, f"Failed to apply {kind} diff: {result.message}")

        if kind == PatchOperationType.CREATE_FILE:
            message = f"Created {self.target_name} from diff"
        else:
            stats = self.diff_service.stats(self.diff_service.diff_lines(working, result.document))
            message = f"Applied update_file diff (+{stats.added}/-{stats.removed})"

        return result.document, ApplyOutcome(call_id=call.call_id, status=ApplyStatus.COMPLETED, message=message)

    def _is_permitted_target(self, path: str | None) -> bool:
        if not path or not path.strip():
            return False
        if ".." in path:
            return False
        return path == self.target_name

    @staticmethod
    def _failed(call: PatchOperationCall, message: str) -> ApplyOutcome:
        return ApplyOutcome(call_id=call.call_id, status=ApplyStatus.FAILED, message=message)
