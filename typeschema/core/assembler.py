import sys
from typing import Any, Dict, Iterable, List, Optional

from typeschema.base.type_oracle import Declaration, TypeOracle
from typeschema.core.exports import ExportedBinding
from typeschema.core.props import PropsExpander
from typeschema.core.synthesizer import SchemaSynthesizer

SCHEMA_DRAFT = "http://json-schema.org/draft-07/schema#"


def build(
    bindings: Iterable[ExportedBinding],
    oracle: TypeOracle,
    declarations: Optional[List[Declaration]] = None,
) -> Dict[str, Any]:
    if declarations is None:
        declarations = oracle.declarations()
    expander = PropsExpander(declarations)
    synthesizer = SchemaSynthesizer()

    properties = {}
    for binding in bindings:
        type_text = oracle.type_of(binding.symbol) if binding.symbol else None
        if type_text is None:
            print(f"Skipping export {binding.name!r}: no local symbol for it", file=sys.stderr)
            continue
        properties[binding.name] = synthesizer.synthesize(expander.expand(type_text))

    return {
        "$schema": SCHEMA_DRAFT,
        "type": "object",
        "properties": properties,
    }
