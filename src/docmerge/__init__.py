# src/docmerge/__init__.py
"""
docmerge — merge de documentos de configuração orientado por política.

Combina vários documentos hierárquicos (ex.: fragmentos YAML) em um
único documento, resolvendo chaves sobrepostas por uma política
declarativa baseada em context paths:

    - overwrite → o documento posterior substitui escalares e listas
    - append    → listas são concatenadas; escalares devem ser iguais
    - resolve   → strings de caminho são reescritas relativas ao
                  diretório do documento de origem

Uso típico:

    from docmerge import MergeOptions, merge_files

    options = MergeOptions(
        source_base_directory="configs",
        resolve_path_patterns=[".local"],
    )
    yaml_bytes = merge_files(options, "common/base.yaml", "host/extra.yaml")
"""

from .core.context import MergeContext
from .core.merge import (
    DocumentLoadError,
    DuplicateKeyError,
    MergeError,
    MergeOptions,
    MergePolicy,
    PolicyConflictError,
    StructureMismatchError,
    load_options,
    merge_documents,
    merge_files,
)

__all__ = [
    "MergeContext",
    "DocumentLoadError",
    "DuplicateKeyError",
    "MergeError",
    "MergeOptions",
    "MergePolicy",
    "PolicyConflictError",
    "StructureMismatchError",
    "load_options",
    "merge_documents",
    "merge_files",
]
