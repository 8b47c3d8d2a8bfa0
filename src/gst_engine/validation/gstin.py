"""
GSTIN and PAN validation
Format checks and the GSTN check-character algorithm
"""

import re
from typing import Dict

from gst_engine.constants import GST_STATE_CODES
from gst_engine.exceptions import GstinValidationError


# Base-36 alphabet used by the check character
CHECK_CHARSET = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ"

PAN_REGEX = re.compile(r"^[A-Z]{5}[0-9]{4}[A-Z]$")

PAN_ENTITY_TYPES: Dict[str, str] = {
    "P": "Individual",
    "C": "Company",
    "H": "HUF",
    "F": "Firm",
    "A": "AOP/BOI",
    "T": "AOP (Trust)",
    "B": "BOI",
    "L": "Local Authority",
    "J": "Artificial Juridical Person",
    "G": "Government",
}


def _clean(value: str) -> str:
    return re.sub(r"\s+", "", value).upper()


class GstinValidator:
    """
    Validates GSTIN format and checksum

    A GSTIN is 2 digits of state code, the 10 character PAN, an entity
    number, the letter Z and a check character.
    """

    GSTIN_REGEX = re.compile(r"^[0-9]{2}[A-Z]{5}[0-9]{4}[A-Z][1-9A-Z]Z[0-9A-Z]$")

    @classmethod
    def validate(cls, gstin: str) -> bool:
        """
        Validate GSTIN format, state code, embedded PAN and check character

        Raises:
            GstinValidationError: Describing the first failed check
        """
        if not gstin or not isinstance(gstin, str):
            raise GstinValidationError("GSTIN must be a non-empty string")

        clean = _clean(gstin)

        if len(clean) != 15:
            raise GstinValidationError(
                "GSTIN must be exactly 15 characters long", details={"gstin": clean}
            )

        if not cls.GSTIN_REGEX.match(clean):
            raise GstinValidationError("GSTIN format is invalid", details={"gstin": clean})

        state_code = clean[:2]
        if state_code not in GST_STATE_CODES:
            raise GstinValidationError(
                f"Invalid state code: {state_code}", details={"gstin": clean}
            )

        if not PAN_REGEX.match(clean[2:12]):
            raise GstinValidationError(
                "Invalid PAN embedded in GSTIN", details={"gstin": clean}
            )

        if cls.generate_check_digit(clean[:14]) != clean[14]:
            raise GstinValidationError(
                "GSTIN checksum validation failed", details={"gstin": clean}
            )

        return True

    @classmethod
    def is_valid(cls, gstin: str) -> bool:
        try:
            return cls.validate(gstin)
        except GstinValidationError:
            return False

    @classmethod
    def extract(cls, gstin: str) -> Dict[str, str]:
        """Split a valid GSTIN into its components"""
        cls.validate(gstin)
        clean = _clean(gstin)

        return {
            "gstin": clean,
            "state_code": clean[:2],
            "state_name": GST_STATE_CODES[clean[:2]],
            "pan": clean[2:12],
            "entity_number": clean[12],
            "check_digit": clean[14],
        }

    @staticmethod
    def generate_check_digit(partial_gstin: str) -> str:
        """
        Compute the check character for the first 14 GSTIN characters

        Walking from the rightmost character, each code point is weighted
        2, 1, 2, ... and the product folded into base 36.
        """
        if len(partial_gstin) != 14:
            raise GstinValidationError("Partial GSTIN must be exactly 14 characters")

        total = 0
        factor = 2
        for char in reversed(partial_gstin.upper()):
            code_point = CHECK_CHARSET.find(char)
            if code_point == -1:
                raise GstinValidationError(f"Invalid character in GSTIN: {char}")

            product = code_point * factor
            total += product // 36 + product % 36
            factor = 1 if factor == 2 else 2

        return CHECK_CHARSET[(36 - total % 36) % 36]


class PanValidator:
    """Validates PAN number format"""

    @staticmethod
    def validate(pan: str) -> bool:
        if not pan or not isinstance(pan, str):
            raise GstinValidationError("PAN must be a non-empty string", field="pan")

        if not PAN_REGEX.match(_clean(pan)):
            raise GstinValidationError("Invalid PAN format", field="pan")
        return True

    @classmethod
    def extract(cls, pan: str) -> Dict[str, object]:
        """
        Describe a PAN

        The fourth character encodes the holder's entity type.
        """
        cls.validate(pan)
        clean = _clean(pan)

        return {
            "pan": clean,
            "entity_type": PAN_ENTITY_TYPES.get(clean[3], "Unknown"),
            "is_individual": clean[3] == "P",
            "is_company": clean[3] == "C",
        }
