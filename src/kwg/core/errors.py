from __future__ import annotations

import json
from dataclasses import asdict
from pathlib import Path
from typing import Any, Mapping, Sequence
from uuid import uuid4

from kwg.contracts import ForensicArtifact
from kwg.core.events import now_utc


class EngineIntegrityError(RuntimeError):
    """A game engine produced state its own rules forbid; play cannot continue."""

    def __init__(self, artifact: ForensicArtifact) -> None:
        super().__init__(f"{artifact.engine_scope}:{artifact.error_code}: {artifact.message}")
        self.artifact = artifact

    @property
    def error_code(self) -> str:
        return self.artifact.error_code


def integrity_failure(
    scope: str,
    code: str,
    message: str,
    *,
    snapshot: Mapping[str, Any] | None = None,
    context: Mapping[str, Any] | None = None,
    identifiers: Mapping[str, Any] | None = None,
    trail: Sequence[str] = (),
) -> EngineIntegrityError:
    """Build the error to raise for a broken invariant, artifact attached."""
    artifact = ForensicArtifact(
        artifact_id=uuid4().hex,
        timestamp=now_utc(),
        engine_scope=scope,
        error_code=code,
        message=message,
        state_snapshot=dict(snapshot or {}),
        context=dict(context or {}),
        identifiers={key: str(value) for key, value in (identifiers or {}).items()},
        causal_fragment=list(trail),
    )
    return EngineIntegrityError(artifact)


def persist_forensic_artifact(artifact: ForensicArtifact, output_dir: Path) -> Path:
    output_dir.mkdir(parents=True, exist_ok=True)
    stamp = artifact.timestamp.strftime("%Y%m%dT%H%M%S")
    path = output_dir / f"{artifact.engine_scope}_{artifact.error_code.lower()}_{stamp}_{artifact.artifact_id[:8]}.json"
    path.write_text(json.dumps(asdict(artifact), default=str, indent=2, sort_keys=True), encoding="utf-8")
    return path
