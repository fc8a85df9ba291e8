# tests/conftest.py
"""
Fixtures compartilhados para testes do docmerge.

Este módulo define fixtures reutilizáveis que fornecem:
- documentos YAML semelhantes a fragmentos reais de configuração
- uma árvore de diretórios com documentos em subdiretórios distintos
- um MergeContext isolado para inspeção de eventos

Decisões:
    - Documentos são fornecidos como strings YAML
    - Cenários com filesystem usam exclusivamente `tmp_path`

Invariantes:
    - Nenhuma fixture depende de estado global
    - Todas as fixtures são seguras para execução em paralelo
"""

from pathlib import Path
from typing import Dict

import pytest


@pytest.fixture
def common_document_yaml() -> str:
    """
    Fragmento base, semelhante a um `common/input1.yaml`.

    Define usuários, um arquivo com conteúdo local e um escalar de versão.
    """
    return """\
variant: fcos
version: 1.5.0
passwd:
  users:
    - name: core
storage:
  files:
    - path: /etc/hostname
      contents:
        local: hostname.txt
"""


@pytest.fixture
def host_document_yaml() -> str:
    """
    Fragmento específico de host, semelhante a um `host-dir/input2.yaml`.

    Acrescenta um usuário e um arquivo; repete `variant` com o mesmo valor.
    """
    return """\
variant: fcos
passwd:
  users:
    - name: admin
storage:
  files:
    - path: /etc/motd
      contents:
        local: motd.txt
"""


@pytest.fixture
def write_documents(tmp_path: Path):
    """
    Escreve documentos sob `tmp_path` e devolve o diretório base.

    Uso:
        base = write_documents({"common/a.yaml": "...", "b.yaml": "..."})
    """

    def _write(documents: Dict[str, str]) -> Path:
        for name, content in documents.items():
            target = tmp_path / name
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(content, encoding="utf-8")
        return tmp_path

    return _write


@pytest.fixture
def merge_context():
    from docmerge.core.context import MergeContext

    return MergeContext(run_id="test-run", created_at="2026-01-01T00:00:00+00:00")
