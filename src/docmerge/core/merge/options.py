# src/docmerge/core/merge/options.py
"""
Opções de uma operação de merge e seu loader.

As opções selecionam o diretório base dos documentos e a política de
merge (default de overwrite e patterns de overwrite, append e resolução
de caminhos). Podem ser construídas diretamente ou carregadas de um
arquivo YAML/JSON.

Formato do arquivo (v1):

    source_base_directory: configs
    default_overwrite: false
    overwrite_patterns: [".local"]
    append_patterns: ["$.storage.files"]
    resolve_path_patterns: [".local"]

Invariantes:
    - Chaves desconhecidas são rejeitadas
    - Listas de patterns contêm apenas strings
    - Arquivo vazio equivale às opções default

Limites explícitos:
    - Não valida conflitos entre patterns (responsabilidade da política)
    - Não lê documentos
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, List

import yaml  # PyYAML

from .errors import InvalidOptionsError, OptionsNotFoundError, UnsupportedFormatError


PATTERN_FIELDS = ("overwrite_patterns", "append_patterns", "resolve_path_patterns")


@dataclass
class MergeOptions:
    """
    Configuração de uma operação de merge.

    Campos:
    - source_base_directory: diretório contra o qual os identificadores de
      documento são resolvidos no carregamento
    - default_overwrite: política usada quando nenhum pattern casa
      (False = erro em escalares, concatenação em listas)
    - overwrite_patterns: patterns que forçam overwrite em conflito
    - append_patterns: patterns que forçam append em conflito
    - resolve_path_patterns: patterns cujas strings são reescritas relativas
      ao diretório de cada documento
    """

    source_base_directory: str = ""
    default_overwrite: bool = False
    overwrite_patterns: List[str] = field(default_factory=list)
    append_patterns: List[str] = field(default_factory=list)
    resolve_path_patterns: List[str] = field(default_factory=list)

    @classmethod
    def from_mapping(cls, data: Dict[str, Any]) -> "MergeOptions":
        """
        Constrói opções a partir de um dicionário com os nomes dos campos.

        Raises:
            InvalidOptionsError: chave desconhecida ou valor de tipo inválido.
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(str(k) for k in data if k not in known)
        if unknown:
            raise InvalidOptionsError(f"Opções desconhecidas: {', '.join(unknown)}")

        if not isinstance(data.get("default_overwrite", False), bool):
            raise InvalidOptionsError("default_overwrite deve ser bool")

        base = data.get("source_base_directory", "")
        if base is None:
            base = ""
        if not isinstance(base, str):
            raise InvalidOptionsError("source_base_directory deve ser string")

        kwargs: Dict[str, Any] = {
            "source_base_directory": base,
            "default_overwrite": data.get("default_overwrite", False),
        }
        for name in PATTERN_FIELDS:
            patterns = data.get(name) or []
            if not isinstance(patterns, list) or not all(isinstance(p, str) for p in patterns):
                raise InvalidOptionsError(f"{name} deve ser uma lista de strings")
            kwargs[name] = list(patterns)

        return cls(**kwargs)


def load_options(path: str) -> MergeOptions:
    """
    Carrega opções de merge de um arquivo YAML ou JSON.

    Args:
        path (str): Caminho para o arquivo de opções.

    Returns:
        MergeOptions: Opções carregadas.

    Raises:
        OptionsNotFoundError: Se o arquivo não existir.
        UnsupportedFormatError: Se o formato do arquivo não for suportado.
        InvalidOptionsError: Se o conteúdo raiz não for um dicionário ou
            contiver opções inválidas.
    """
    file = Path(path)
    if not file.exists():
        raise OptionsNotFoundError(f"Arquivo de opções não encontrado: {file}")

    suffix = file.suffix.lower()

    if suffix in {".yaml", ".yml"}:
        with file.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f)

    elif suffix == ".json":
        with file.open("r", encoding="utf-8") as f:
            data = json.load(f)

    else:
        raise UnsupportedFormatError(f"Formato não suportado: {file.suffix}")

    if data is None:
        data = {}

    if not isinstance(data, dict):
        raise InvalidOptionsError(
            f"Raiz das opções deve ser dict, recebido: {type(data).__name__}"
        )

    return MergeOptions.from_mapping(data)
