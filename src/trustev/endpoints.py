"""URL templates for every API resource.

Templates are formatted with ``base`` plus the resource identifiers named
in braces. Anything under ``/session`` is authenticated by public key
(see :func:`trustev.auth.headers.is_session_endpoint`).
"""

TOKEN = "{base}/token"

SESSION = "{base}/session"
SESSION_DETAIL = "{base}/session/{session_id}/detail"

CASE = "{base}/case"
CASE_ITEM = "{base}/case/{case_id}"
DECISION = "{base}/decision/{case_id}"
DETAILED_DECISION = "{base}/detaileddecision/{case_id}"
OTP = "{base}/case/{case_id}/otp"
KBA_RESULT = "{base}/case/{case_id}/kbaresult"

CASE_STATUS = "{base}/case/{case_id}/status"
CASE_STATUS_ITEM = "{base}/case/{case_id}/status/{status_id}"

CUSTOMER = "{base}/case/{case_id}/customer"
CUSTOMER_ADDRESS = "{base}/case/{case_id}/customer/address"
CUSTOMER_ADDRESS_ITEM = "{base}/case/{case_id}/customer/address/{address_id}"
CUSTOMER_EMAIL = "{base}/case/{case_id}/customer/email"
CUSTOMER_EMAIL_ITEM = "{base}/case/{case_id}/customer/email/{email_id}"

PAYMENT = "{base}/case/{case_id}/payment"
PAYMENT_ITEM = "{base}/case/{case_id}/payment/{payment_id}"

TRANSACTION = "{base}/case/{case_id}/transaction"
TRANSACTION_ADDRESS = "{base}/case/{case_id}/transaction/address"
TRANSACTION_ADDRESS_ITEM = "{base}/case/{case_id}/transaction/address/{address_id}"
TRANSACTION_ITEM = "{base}/case/{case_id}/transaction/item"
TRANSACTION_ITEM_ITEM = "{base}/case/{case_id}/transaction/item/{item_id}"


def token_uri(base: str) -> str:
    return TOKEN.format(base=base)
