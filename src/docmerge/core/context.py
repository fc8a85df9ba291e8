# src/docmerge/core/context.py
"""
MergeContext — contexto de execução de uma operação de merge.

Este módulo define o **MergeContext**, a estrutura passada ao resolver,
ao merger e ao pipeline durante uma operação de merge.

O MergeContext é o meio de:
- registro de logs estruturados (carregamento, reescrita de caminhos, merge)
- coleta de warnings não fatais por estágio

Princípios fundamentais:
- Isolamento por execução (cada merge possui seu próprio contexto)
- Nenhum estado global é compartilhado entre operações
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List


@dataclass
class MergeContext:
    """
    Contexto de execução de uma operação de merge.

    Campos canônicos:
    - run_id: identificador único da operação
    - created_at: timestamp UTC de criação do contexto
    - warnings: warnings por estágio (ex.: "resolve")
    - events: log estruturado de eventos, na ordem em que ocorreram
    """

    run_id: str
    created_at: str

    warnings: Dict[str, List[str]] = field(default_factory=dict)
    events: List[Dict[str, Any]] = field(default_factory=list)

    @classmethod
    def new(cls) -> "MergeContext":
        return cls(
            run_id=uuid.uuid4().hex,
            created_at=datetime.now(timezone.utc).isoformat(),
        )

    # -----------------------------
    # Logging & warnings
    # -----------------------------
    def log(self, *, stage: str, level: str, message: str, **extra: Any) -> None:
        event = {
            "run_id": self.run_id,
            "stage": stage,
            "level": level,
            "message": message,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
        event.update(extra)
        self.events.append(event)

    def add_warning(self, *, stage: str, message: str) -> None:
        if stage not in self.warnings:
            self.warnings[stage] = []
        self.warnings[stage].append(message)
        self.log(stage=stage, level="WARNING", message=message)

    def events_for(self, stage: str) -> List[Dict[str, Any]]:
        return [e for e in self.events if e["stage"] == stage]
