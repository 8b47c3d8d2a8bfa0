"""HSN and SAC code validation"""

import re
from typing import Dict

from gst_engine.exceptions import ValidationError


HSN_REGEX = re.compile(r"^[0-9]{2,8}$")
SAC_REGEX = re.compile(r"^[0-9]{6}$")

SAC_CATEGORIES: Dict[str, str] = {
    "99": "Services by way of other categories",
    "98": "Telecommunication services",
    "97": "Financial and related services",
    "96": "Computer and related services",
    "95": "Travel agency, tour operator services",
    "94": "Sporting and other recreational services",
    "93": "Maintenance and repair services",
    "92": "Education services",
    "91": "Health and social services",
    "90": "Sewage and refuse disposal services",
}


class HsnValidator:
    """Validates HSN (Harmonized System of Nomenclature) codes"""

    @staticmethod
    def validate(hsn: str) -> bool:
        if not hsn or not isinstance(hsn, str):
            raise ValidationError(
                "HSN must be a non-empty string", field="hsn", code="VAL_HSN"
            )

        if not HSN_REGEX.match(re.sub(r"\s+", "", hsn)):
            raise ValidationError(
                "Invalid HSN format: expected 2 to 8 digits", field="hsn", code="VAL_HSN"
            )
        return True

    @classmethod
    def get_chapter(cls, hsn: str) -> str:
        cls.validate(hsn)
        return re.sub(r"\s+", "", hsn)[:2]


class SacValidator:
    """Validates SAC (Services Accounting Code) codes"""

    @staticmethod
    def validate(sac: str) -> bool:
        if not sac or not isinstance(sac, str):
            raise ValidationError(
                "SAC must be a non-empty string", field="sac", code="VAL_SAC"
            )

        if not SAC_REGEX.match(re.sub(r"\s+", "", sac)):
            raise ValidationError(
                "Invalid SAC format: expected 6 digits", field="sac", code="VAL_SAC"
            )
        return True

    @classmethod
    def get_category_info(cls, sac: str) -> Dict[str, str]:
        cls.validate(sac)
        category = re.sub(r"\s+", "", sac)[:2]
        return {
            "category": category,
            "description": SAC_CATEGORIES.get(category, "Unknown Category"),
        }
