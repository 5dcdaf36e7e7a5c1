"""
Lenient CSV importer for journal trades.

Turns spreadsheet exports (comma or semicolon delimited, assorted date and
number formats) into ParsedTrade records using a caller-supplied
header -> trade field mapping. Bad rows are reported and dropped; they never
abort the import.
"""

import logging
import math
import re
from datetime import date, datetime
from typing import Callable, Dict, List, Mapping, Optional, Tuple

from csv_line_splitter import detect_delimiter, normalize_trim, parse_value, split_csv_line
from trade import ParsedTrade, ParseResult, RowError
from trade_flags import LOSE, WIN, is_lose_outcome
from trade_pnl import calculate_trade_pnl

LOGGER = logging.getLogger(__name__)

FILE_ERROR_MESSAGE = "CSV file has no data rows."
DEFAULT_TRADE_TIME = "00:00:00"

# English names regardless of the process locale.
WEEKDAY_NAMES = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")

NUMERIC_FIELD_LABELS = {
    "risk_per_trade": "Risk %",
    "risk_reward_ratio": "Risk:Reward Ratio",
    "risk_reward_ratio_long": "Potential Risk:Reward Ratio",
    "sl_size": "SL Size",
    "calculated_profit": "Profit",
    "pnl_percentage": "P&L %",
    "displacement_size": "Displacement Size",
    "fvg_size": "FVG Size",
}

BOOLEAN_FIELDS = ("break_even", "reentry", "news_related", "local_high_low", "partials_taken", "launch_hour")

TEXT_FIELDS = ("setup_type", "mss", "liquidity", "trade_link", "liquidity_taken", "evaluation")

TRADE_FIELDS = frozenset(
    [
        "trade_date", "trade_time", "day_of_week", "quarter", "market", "direction",
        "trade_outcome", "notes", "trend", "executed",
    ]
    + list(NUMERIC_FIELD_LABELS)
    + list(BOOLEAN_FIELDS)
    + list(TEXT_FIELDS)
)


# --- Dates -------------------------------------------------------------------

def _safe_date(year: str, month: str, day: str) -> Optional[date]:
    try:
        return date(int(year), int(month), int(day))
    except ValueError:
        return None


def _parse_iso(value: str) -> Optional[date]:
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00")).date()
    except ValueError:
        return None


def _ymd_pattern(pattern: str, year: int, month: int, day: int) -> Callable[[str], Optional[date]]:
    """Candidate parser reading year/month/day from the given regex groups."""
    regex = re.compile(pattern)

    def attempt(value: str) -> Optional[date]:
        match = regex.match(value)
        if not match:
            return None
        return _safe_date(match.group(year), match.group(month), match.group(day))

    return attempt


_AMBIGUOUS_SLASH = re.compile(r"^(\d{1,2})/(\d{1,2})/(\d{4})$")


def _parse_ambiguous_slash(value: str) -> Optional[date]:
    """A/B/YYYY: day-first when that is a real date, month-first otherwise."""
    match = _AMBIGUOUS_SLASH.match(value)
    if not match:
        return None
    first, second, year = match.groups()
    return _safe_date(year, second, first) or _safe_date(year, first, second)


# Ordered: the first candidate returning a date wins.
DATE_CANDIDATES: List[Tuple[str, Callable[[str], Optional[date]]]] = [
    ("YYYY-MM-DD", _parse_iso),
    ("DD.MM.YYYY", _ymd_pattern(r"^(\d{2})\.(\d{2})\.(\d{4})$", 3, 2, 1)),
    ("DD/MM/YYYY", _ymd_pattern(r"^(\d{2})/(\d{2})/(\d{4})$", 3, 2, 1)),
    ("D.M.YYYY", _ymd_pattern(r"^(\d{1,2})\.(\d{1,2})\.(\d{4})$", 3, 2, 1)),
    ("D/M/YYYY", _ymd_pattern(r"^(\d{1,2})/(\d{1,2})/(\d{4})$", 3, 2, 1)),
    ("YYYY-M-D", _ymd_pattern(r"^(\d{4})-(\d{1,2})-(\d{1,2})", 1, 2, 3)),
    ("YYYY.M.D", _ymd_pattern(r"^(\d{4})\.(\d{1,2})\.(\d{1,2})$", 1, 2, 3)),
    ("MM/DD/YYYY", _parse_ambiguous_slash),
    ("MM-DD-YYYY", _ymd_pattern(r"^(\d{1,2})-(\d{1,2})-(\d{4})$", 3, 1, 2)),
]


def parse_date_flexible(value: str) -> Optional[date]:
    if not value:
        return None
    for _, candidate in DATE_CANDIDATES:
        parsed = candidate(value)
        if parsed is not None:
            return parsed
    return None


def derive_quarter(parsed: date) -> str:
    return f"Q{(parsed.month - 1) // 3 + 1}"


# --- Numbers -----------------------------------------------------------------

_NUMERIC_NOISE = re.compile(r"[\s€$£¥%]")
_TRAILING_UNIT = re.compile(r"[rRkK]\s*$")
_EU_NUMBER = re.compile(r"^\d{1,3}(\.\d{3})*,\d+$")


def normalize_numeric_input(raw: str) -> str:
    """
    Strip currency symbols, whitespace and a trailing R/k unit, and turn EU
    (1.234,56) or comma-decimal (1,5) input into a float-parsable string.
    """
    s = _NUMERIC_NOISE.sub("", normalize_trim(raw))
    s = _TRAILING_UNIT.sub("", s)
    if _EU_NUMBER.match(s):
        return s.replace(".", "").replace(",", ".")
    s = s.replace(",", ".")
    parts = s.split(".")
    if len(parts) > 2:
        s = "".join(parts[:-1]) + "." + parts[-1]
    return s


def parse_float(normalized: str) -> Optional[float]:
    try:
        number = float(normalized)
    except ValueError:
        return None
    return number if math.isfinite(number) else None


def parse_bool(value: Optional[str]) -> bool:
    # Any non-empty text is True, "no" and "0" included. Normalize upstream
    # for stricter matching.
    return normalize_trim(value or "") != ""


# --- Rows ----------------------------------------------------------------------

def _coerce_number(field_values, field, row_index, empty_value, row_errors) -> Optional[float]:
    raw = field_values.get(field, "")
    normalized = normalize_numeric_input(raw)
    if normalized == "":
        return empty_value
    number = parse_float(normalized)
    if number is None:
        row_errors.append(
            RowError(row_index, field, f'{NUMERIC_FIELD_LABELS[field]} must be a number, got: "{raw}"')
        )
    return number


def _default_for(defaults: Mapping, field: str):
    value = defaults.get(field)
    if value is None or (isinstance(value, float) and math.isnan(value)):
        return 0
    return value


def _pnl_values(result) -> Tuple[float, float]:
    if isinstance(result, Mapping):
        return result["calculated_profit"], result["pnl_percentage"]
    return result.calculated_profit, result.pnl_percentage


def _parse_row(
    row_index: int,
    field_values: Dict[str, str],
    defaults: Mapping,
    pnl_calculator,
    market_validator,
) -> Tuple[Optional[ParsedTrade], List[RowError]]:
    row_errors: List[RowError] = []

    def text(field: str) -> str:
        return normalize_trim(field_values.get(field, ""))

    date_text = text("trade_date")
    parsed_date = None
    trade_date = ""
    if date_text:
        parsed_date = parse_date_flexible(date_text)
        if parsed_date is None:
            tried = ", ".join(name for name, _ in DATE_CANDIDATES)
            row_errors.append(
                RowError(row_index, "trade_date", f'Invalid date: "{date_text}" (tried {tried})')
            )
        else:
            trade_date = parsed_date.isoformat()

    market = text("market")
    if market_validator is not None:
        market_error = market_validator(market)
        if market_error:
            row_errors.append(RowError(row_index, "market", market_error))

    risk_per_trade = _coerce_number(
        field_values, "risk_per_trade", row_index, _default_for(defaults, "risk_per_trade"), row_errors
    )
    risk_reward_ratio = _coerce_number(
        field_values, "risk_reward_ratio", row_index, _default_for(defaults, "risk_reward_ratio"), row_errors
    )
    sl_size = _coerce_number(field_values, "sl_size", row_index, 0, row_errors)
    rr_long = _coerce_number(field_values, "risk_reward_ratio_long", row_index, None, row_errors)
    calculated_profit = _coerce_number(field_values, "calculated_profit", row_index, None, row_errors)
    pnl_percentage = _coerce_number(field_values, "pnl_percentage", row_index, None, row_errors)
    displacement_size = _coerce_number(field_values, "displacement_size", row_index, 0, row_errors)
    fvg_size = _coerce_number(field_values, "fvg_size", row_index, None, row_errors)

    if row_errors:
        return None, row_errors

    outcome = text("trade_outcome")
    is_lose = is_lose_outcome(outcome)
    if rr_long is None:
        rr_long = 0 if is_lose else risk_reward_ratio

    flags = {field: parse_bool(field_values.get(field)) for field in BOOLEAN_FIELDS}
    executed = parse_bool(field_values["executed"]) if "executed" in field_values else True

    account_balance = defaults.get("account_balance")
    if calculated_profit is None and pnl_percentage is None and account_balance:
        pnl = pnl_calculator(
            LOSE if is_lose else WIN,
            risk_per_trade,
            risk_reward_ratio,
            flags["break_even"],
            account_balance,
        )
        calculated_profit, pnl_percentage = _pnl_values(pnl)

    trade = ParsedTrade(
        trade_date=trade_date,
        trade_time=text("trade_time") or DEFAULT_TRADE_TIME,
        day_of_week=WEEKDAY_NAMES[parsed_date.weekday()] if parsed_date else text("day_of_week"),
        quarter=derive_quarter(parsed_date) if parsed_date else text("quarter"),
        market=market,
        direction=text("direction"),
        trade_outcome=outcome,
        risk_per_trade=risk_per_trade,
        risk_reward_ratio=risk_reward_ratio,
        risk_reward_ratio_long=rr_long,
        sl_size=sl_size,
        executed=executed,
        notes=text("notes") or None,
        trend=text("trend") or None,
        displacement_size=displacement_size,
        fvg_size=fvg_size,
        calculated_profit=calculated_profit,
        pnl_percentage=pnl_percentage,
        **flags,
        **{field: text(field) for field in TEXT_FIELDS},
    )
    return trade, []


def _split_lines(csv_text: str) -> List[str]:
    return [line for line in re.split(r"\r?\n", csv_text) if normalize_trim(line) != ""]


def parse_csv_trades(
    csv_text: str,
    mapping: Mapping[str, Optional[str]],
    defaults: Optional[Mapping] = None,
    pnl_calculator=calculate_trade_pnl,
    market_validator: Optional[Callable[[str], Optional[str]]] = None,
) -> ParseResult:
    """
    Parse CSV text into trades using a header -> trade field mapping.

    Args:
        csv_text: Raw file content; the first non-blank line is the header.
        mapping: CSV header -> trade field name. None or missing skips the column.
        defaults: Optional risk_per_trade / risk_reward_ratio used for empty
            cells, and account_balance used to back-fill P&L.
        pnl_calculator: Called as (outcome, risk_pct, rr, break_even, balance)
            when a row carries neither calculated_profit nor pnl_percentage.
        market_validator: Optional callable returning an error message for a
            rejected market symbol.

    Returns:
        ParseResult with the accepted rows and every row error. A file with
        no data rows yields a single file-level error.
    """
    defaults = defaults or {}
    lines = _split_lines(csv_text)
    if len(lines) < 2:
        LOGGER.warning("CSV import rejected: %s", FILE_ERROR_MESSAGE)
        return ParseResult(rows=[], errors=[RowError(0, "file", FILE_ERROR_MESSAGE)])

    delimiter = detect_delimiter(lines[0])
    csv_headers = [parse_value(header) for header in split_csv_line(lines[0], delimiter)]
    result = ParseResult()
    skipped = 0

    for row_index in range(1, len(lines)):
        values = split_csv_line(lines[row_index], delimiter)

        field_values: Dict[str, str] = {}
        for col_idx, header in enumerate(csv_headers):
            trade_field = mapping.get(header)
            if trade_field:
                raw = values[col_idx] if col_idx < len(values) else ""
                field_values[trade_field] = parse_value(raw)

        # Trailing summary columns in exported sheets leave rows with nothing mapped.
        if all(value == "" for value in field_values.values()):
            skipped += 1
            continue

        trade, row_errors = _parse_row(row_index, field_values, defaults, pnl_calculator, market_validator)
        if row_errors:
            LOGGER.debug("Dropping row %d: %s", row_index, "; ".join(e.message for e in row_errors))
            result.errors.extend(row_errors)
        else:
            result.rows.append(trade)

    LOGGER.info(
        "Parsed %d trades (%d row errors, %d blank rows skipped, delimiter %r)",
        len(result.rows),
        len(result.errors),
        skipped,
        delimiter,
    )
    return result


def extract_csv_headers(csv_text: str) -> List[str]:
    """Header row of a CSV string, cleaned the same way parse_csv_trades sees it."""
    first_line = re.split(r"\r?\n", csv_text)[0] if csv_text else ""
    delimiter = detect_delimiter(first_line)
    return [parse_value(header) for header in split_csv_line(first_line, delimiter)]
