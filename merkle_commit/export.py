import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Sequence, Union

logger = logging.getLogger(__name__)


def hex_list(digests: Sequence[bytes]) -> List[str]:
    return ["0x" + d.hex() for d in digests]


def write_json(document: Dict[str, Any], path: Union[str, Path]) -> Path:
    path = Path(path)
    if path.parent != Path("."):
        path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as f:
        json.dump(document, f, indent=2)
    logger.info("Saved %s", path)
    return path


def solidity_proof_snippet(name: str, proof: Sequence[bytes]) -> str:
    """bytes32[] literal for pasting a proof into a Solidity test script."""
    var = f"PROOF_{name}"
    lines = [f"{var} = new bytes32[]({len(proof)});"]
    for i, p in enumerate(hex_list(proof)):
        lines.append(f"{var}[{i}] = {p};")
    return "\n".join(lines)
