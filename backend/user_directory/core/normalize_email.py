"""Email Normalization — canonical form used for storage and uniqueness.

Invariants:
    - Output is always lower-case
    - Gmail addresses collapse dots and +subaddress in the local part;
      googlemail.com is folded into gmail.com
    - Outlook.com and iCloud families drop the +subaddress
    - Yahoo family drops the last -subaddress
    - Yandex aliases are folded into yandex.ru
    - A rule that would leave the local part empty is not applied

Design Decisions:
    - Normalize once at the validation boundary; the stored value is the
      normalized one, so the UNIQUE column catches equivalent addresses
    - Provider families are plain domain sets; unknown domains are only
      lower-cased
"""

GMAIL_DOMAINS: frozenset[str] = frozenset({"gmail.com", "googlemail.com"})
CANONICAL_GMAIL_DOMAIN = "gmail.com"

ICLOUD_DOMAINS: frozenset[str] = frozenset({"icloud.com", "me.com"})

OUTLOOK_DOMAINS: frozenset[str] = frozenset({
    "hotmail.at", "hotmail.be", "hotmail.ca", "hotmail.cl", "hotmail.co.il",
    "hotmail.co.nz", "hotmail.co.th", "hotmail.co.uk", "hotmail.com",
    "hotmail.com.ar", "hotmail.com.au", "hotmail.com.br", "hotmail.com.gr",
    "hotmail.com.mx", "hotmail.com.pe", "hotmail.com.tr", "hotmail.com.vn",
    "hotmail.cz", "hotmail.de", "hotmail.dk", "hotmail.es", "hotmail.fr",
    "hotmail.hu", "hotmail.id", "hotmail.ie", "hotmail.in", "hotmail.it",
    "hotmail.jp", "hotmail.kr", "hotmail.lv", "hotmail.my", "hotmail.ph",
    "hotmail.pt", "hotmail.sa", "hotmail.sg", "hotmail.sk",
    "live.be", "live.co.uk", "live.com", "live.com.ar", "live.com.mx",
    "live.de", "live.es", "live.eu", "live.fr", "live.it", "live.nl",
    "msn.com",
    "outlook.at", "outlook.be", "outlook.cl", "outlook.co.il", "outlook.co.nz",
    "outlook.co.th", "outlook.com", "outlook.com.ar", "outlook.com.au",
    "outlook.com.br", "outlook.com.gr", "outlook.com.pe", "outlook.com.tr",
    "outlook.com.vn", "outlook.cz", "outlook.de", "outlook.dk", "outlook.es",
    "outlook.fr", "outlook.hu", "outlook.id", "outlook.ie", "outlook.in",
    "outlook.it", "outlook.jp", "outlook.kr", "outlook.lv", "outlook.my",
    "outlook.ph", "outlook.pt", "outlook.sa", "outlook.sg", "outlook.sk",
    "passport.com",
})

YAHOO_DOMAINS: frozenset[str] = frozenset({
    "rocketmail.com", "yahoo.ca", "yahoo.co.uk", "yahoo.com", "yahoo.de",
    "yahoo.fr", "yahoo.in", "yahoo.it", "ymail.com",
})

YANDEX_DOMAINS: frozenset[str] = frozenset({
    "yandex.ru", "yandex.ua", "yandex.kz", "yandex.com", "yandex.by", "ya.ru",
})
CANONICAL_YANDEX_DOMAIN = "yandex.ru"


def _drop_plus_tag(local: str) -> str:
    return local.split("+", 1)[0]


def _drop_last_dash_tag(local: str) -> str:
    head, sep, _ = local.rpartition("-")
    return head if sep else local


def normalize_email(email: str) -> str:
    """Return the canonical form of an already syntactically valid email."""
    local, _, domain = email.strip().rpartition("@")
    if not local:
        return email.strip().lower()

    local = local.lower()
    domain = domain.lower()
    canonical = local
    if domain in GMAIL_DOMAINS:
        canonical = _drop_plus_tag(local).replace(".", "")
        domain = CANONICAL_GMAIL_DOMAIN
    elif domain in ICLOUD_DOMAINS or domain in OUTLOOK_DOMAINS:
        canonical = _drop_plus_tag(local)
    elif domain in YAHOO_DOMAINS:
        canonical = _drop_last_dash_tag(local)
    elif domain in YANDEX_DOMAINS:
        domain = CANONICAL_YANDEX_DOMAIN
    return f"{canonical or local}@{domain}"
