from typing import Any, Dict, Optional, Union

from merkle_core.crypto import as_bytes, from_hex
from merkle_core.hasher import Hasher, get_hasher
from merkle_core.models import ProofModel
from merkle_core.proof import verify_proof


def verify_proof_json(
    leaf_data: bytes,
    proof_json: Union[Dict[str, Any], str, bytes],
    root_hex: str,
    hasher: Optional[Union[Hasher, str]] = None,
) -> bool:
    """Return True if ``proof_json`` authenticates ``leaf_data`` under ``root_hex``.

    ``proof_json`` is the wire shape ``{"index": int, "siblings": [hex, ...]}``,
    either already parsed or as JSON text. Malformed proofs, roots or hasher
    names, or leaf data that is not bytes-like, all yield False rather than an
    exception.
    """
    try:
        leaf_data = as_bytes(leaf_data, "leaf data")
        if isinstance(proof_json, (str, bytes)):
            model = ProofModel.model_validate_json(proof_json)
        else:
            model = ProofModel.model_validate(proof_json)
        proof = model.to_proof()
        root = from_hex(root_hex)
        if hasher is None or isinstance(hasher, str):
            from merkle_core.settings import settings

            hasher = get_hasher(hasher or settings.hasher)
    except (TypeError, ValueError):
        return False
    return verify_proof(leaf_data, proof, root, hasher)
