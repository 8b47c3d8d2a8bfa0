"""State code helpers"""

from gst_engine.constants import GST_STATE_CODES


def normalize_state_code(state_code: str) -> str:
    """Two-digit form of a state code, so " 7" and "07" compare equal"""
    return state_code.strip().zfill(2)


def is_intra_state(supplier_state: str, customer_state: str) -> bool:
    """Supplier and customer registered in the same state"""
    return normalize_state_code(supplier_state) == normalize_state_code(customer_state)


def get_state_name(state_code: str) -> str:
    return GST_STATE_CODES.get(normalize_state_code(state_code), "Unknown State")


def is_valid_state_code(state_code: str) -> bool:
    return normalize_state_code(state_code) in GST_STATE_CODES
