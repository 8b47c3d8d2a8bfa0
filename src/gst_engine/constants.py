"""
GST constants
Statutory rate schedule, withholding defaults, state codes and
invoice classification enums
"""

from decimal import Decimal
from enum import Enum
from typing import Dict, Tuple


class GST_RATES:
    """Standard GST rates in India (percent)"""
    EXEMPT = Decimal("0")
    GST_5 = Decimal("5")
    GST_12 = Decimal("12")
    GST_18 = Decimal("18")
    GST_28 = Decimal("28")


STATUTORY_GST_RATES: Tuple[Decimal, ...] = (
    GST_RATES.EXEMPT,
    GST_RATES.GST_5,
    GST_RATES.GST_12,
    GST_RATES.GST_18,
    GST_RATES.GST_28,
)

# Rate applied when a classification code matches no rule
DEFAULT_GST_RATE = GST_RATES.GST_18

# TDS under section 51 is 2% of the GST amount
DEFAULT_TDS_RATE = Decimal("2")

MIN_GST_RATE = Decimal("0")
MAX_GST_RATE = Decimal("50")


# GST state codes for all Indian states and union territories
GST_STATE_CODES: Dict[str, str] = {
    "01": "Jammu and Kashmir",
    "02": "Himachal Pradesh",
    "03": "Punjab",
    "04": "Chandigarh",
    "05": "Uttarakhand",
    "06": "Haryana",
    "07": "Delhi",
    "08": "Rajasthan",
    "09": "Uttar Pradesh",
    "10": "Bihar",
    "11": "Sikkim",
    "12": "Arunachal Pradesh",
    "13": "Nagaland",
    "14": "Manipur",
    "15": "Mizoram",
    "16": "Tripura",
    "17": "Meghalaya",
    "18": "Assam",
    "19": "West Bengal",
    "20": "Jharkhand",
    "21": "Odisha",
    "22": "Chhattisgarh",
    "23": "Madhya Pradesh",
    "24": "Gujarat",
    "25": "Daman and Diu",
    "26": "Dadra and Nagar Haveli",
    "27": "Maharashtra",
    "28": "Andhra Pradesh",
    "29": "Karnataka",
    "30": "Goa",
    "31": "Lakshadweep",
    "32": "Kerala",
    "33": "Tamil Nadu",
    "34": "Puducherry",
    "35": "Andaman and Nicobar Islands",
    "36": "Telangana",
    "37": "Andhra Pradesh (New)",
    "38": "Ladakh",
}


class GstInvoiceType(str, Enum):
    """GST invoice types"""
    TAX_INVOICE = "Tax Invoice"
    BILL_OF_SUPPLY = "Bill of Supply"
    CREDIT_NOTE = "Credit Note"
    DEBIT_NOTE = "Debit Note"
    EXPORT_INVOICE = "Export Invoice"
    SEZ_INVOICE = "SEZ Invoice"


class GstTransactionType(str, Enum):
    """Transaction types used to classify supplies"""
    B2B = "B2B"
    B2C = "B2C"
    B2CL = "B2CL"  # B2C large, above Rs 2.5 lakh inter-state
    EXPORT = "EXP"
    SEZ = "SEZWP"
    SEZWOP = "SEZWOP"
    DEEMED_EXPORT = "DEXP"
    IMPORT = "IMP"
