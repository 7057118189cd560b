"""직업별 기본 일과 템플릿

home/work 위치는 NPC의 현재 위치(primary)에서 파생한다.
공용 장소(시장, 선술집, 신전)는 고정 ID를 사용한다.
"""

import random
from typing import Callable, Dict, List, Optional, Tuple

from npcsim.core.schedule.models import NPCSchedule, ScheduleEntry

MARKET_ID = "market_square"
TAVERN_ID = "tavern"
TEMPLE_ID = "temple"
STREETS_ID = "town_streets"

# (start_hour, end_hour, location 키, activity)
# location 키: "primary" / "home" / 그 외는 리터럴 ID 또는 "{primary}_xxx" 포맷
_Row = Tuple[int, int, str, str]

DEFAULT_ROWS: List[_Row] = [
    (0, 7, "primary", "Sleeping"),
    (7, 9, "primary", "Morning routine"),
    (9, 18, "primary", "Daily activities"),
    (18, 22, "primary", "Evening relaxation"),
    (22, 24, "primary", "Preparing for sleep"),
]

INNKEEPER_ROWS: List[_Row] = [
    (0, 2, "primary", "Serving late night patrons"),
    (2, 6, "primary", "Sleeping"),
    (6, 10, "primary", "Preparing the tavern, cooking breakfast"),
    (10, 15, "primary", "Serving patrons"),
    (15, 17, "primary", "Taking a short break"),
    (17, 24, "primary", "Serving dinner and drinks"),
]

MERCHANT_ROWS: List[_Row] = [
    (0, 7, "{primary}_home", "Sleeping"),
    (7, 8, "primary", "Opening the shop"),
    (8, 12, "primary", "Attending to customers"),
    (12, 13, "{primary}_home", "Lunch break"),
    (13, 18, "primary", "Attending to customers"),
    (18, 19, "primary", "Closing the shop"),
    (19, 24, "{primary}_home", "Relaxing at home"),
]

GUARD_DAY_ROWS: List[_Row] = [
    (0, 6, "{primary}_barracks", "Sleeping"),
    (6, 7, "{primary}_barracks", "Preparing for duty"),
    (7, 12, "primary", "Patrolling"),
    (12, 13, "{primary}_barracks", "Lunch break"),
    (13, 18, "primary", "Patrolling"),
    (18, 24, "{primary}_barracks", "Off duty"),
]

GUARD_NIGHT_ROWS: List[_Row] = [
    (0, 6, "primary", "On duty - night patrol"),
    (6, 7, "{primary}_barracks", "End of shift"),
    (7, 15, "{primary}_barracks", "Sleeping"),
    (15, 18, "{primary}_barracks", "Off duty"),
    (18, 19, "{primary}_barracks", "Preparing for duty"),
    (19, 24, "primary", "On duty - night patrol"),
]

FARMER_ROWS: List[_Row] = [
    (0, 5, "primary", "Sleeping"),
    (5, 12, "primary", "Tending to crops and animals"),
    (12, 13, "primary", "Lunch break"),
    (13, 16, MARKET_ID, "Selling produce at the market"),
    (16, 19, "primary", "Afternoon farm work"),
    (19, 21, "primary", "Dinner and relaxation"),
    (21, 24, "primary", "Sleeping"),
]

BLACKSMITH_ROWS: List[_Row] = [
    (0, 6, "primary", "Sleeping"),
    (6, 7, "primary", "Lighting the forge"),
    (7, 12, "primary", "Forging and smithing"),
    (12, 13, "primary", "Lunch break"),
    (13, 18, "primary", "Forging and smithing"),
    (18, 19, "primary", "Cleaning up the smithy"),
    (19, 24, "primary", "Relaxing at home"),
]

PRIEST_ROWS: List[_Row] = [
    (0, 5, "{primary}_quarters", "Sleeping"),
    (5, 7, "primary", "Morning prayers"),
    (7, 12, "primary", "Temple duties and services"),
    (12, 13, "{primary}_quarters", "Midday meal"),
    (13, 17, "primary", "Counseling and temple services"),
    (17, 19, "primary", "Evening prayers"),
    (19, 22, "{primary}_quarters", "Study and reflection"),
    (22, 24, "{primary}_quarters", "Sleeping"),
]

NOBLE_ROWS: List[_Row] = [
    (0, 8, "primary", "Sleeping"),
    (8, 10, "primary", "Morning routine and breakfast"),
    (10, 13, "{primary}_study", "Attending to business affairs"),
    (13, 14, "primary", "Midday meal"),
    (14, 17, "{primary}_garden", "Leisure activities"),
    (17, 19, "primary", "Preparing for dinner"),
    (19, 22, "{primary}_hall", "Dinner and entertainment"),
    (22, 24, "primary", "Retiring for the night"),
]

BEGGAR_ROWS: List[_Row] = [
    (0, 6, STREETS_ID, "Sleeping in a sheltered spot"),
    (6, 12, MARKET_ID, "Begging in the marketplace"),
    (12, 14, STREETS_ID, "Finding food and resting"),
    (14, 18, MARKET_ID, "Begging in the marketplace"),
    (18, 22, TAVERN_ID, "Begging from tavern patrons"),
    (22, 24, STREETS_ID, "Finding shelter for the night"),
]

TRAVELER_ROWS: List[_Row] = [
    (0, 8, "primary", "Sleeping at the inn"),
    (8, 10, "primary", "Having breakfast and planning the day"),
    (10, 14, MARKET_ID, "Exploring the marketplace"),
    (14, 17, TEMPLE_ID, "Visiting local attractions"),
    (17, 21, TAVERN_ID, "Dining and drinking at the tavern"),
    (21, 24, "primary", "Returning to the inn for the night"),
]


def roll_guard_shift(rng: Optional[random.Random] = None) -> bool:
    """True면 주간 근무, False면 야간 근무 (50%)"""
    return (rng or random).random() > 0.5


def _build(rows: List[_Row], primary: str) -> List[ScheduleEntry]:
    entries = []
    for start, end, loc_key, activity in rows:
        if loc_key == "primary":
            location = primary
        else:
            location = loc_key.format(primary=primary)
        entries.append(ScheduleEntry(location, start, end, activity))
    return entries


def _rows_schedule(rows: List[_Row]) -> Callable[[str, Optional[random.Random]], NPCSchedule]:
    def factory(primary: str, rng: Optional[random.Random] = None) -> NPCSchedule:
        return NPCSchedule(base_entries=_build(rows, primary))

    return factory


def _guard_schedule(primary: str, rng: Optional[random.Random] = None) -> NPCSchedule:
    rows = GUARD_DAY_ROWS if roll_guard_shift(rng) else GUARD_NIGHT_ROWS
    return NPCSchedule(base_entries=_build(rows, primary))


def _farmer_schedule(primary: str, rng: Optional[random.Random] = None) -> NPCSchedule:
    # 2번 요일은 장날
    return NPCSchedule(
        base_entries=_build(FARMER_ROWS, primary),
        weekly_overrides={2: MARKET_ID},
    )


def _priest_schedule(primary: str, rng: Optional[random.Random] = None) -> NPCSchedule:
    # 0번 요일은 종일 신전
    return NPCSchedule(
        base_entries=_build(PRIEST_ROWS, primary),
        weekly_overrides={0: primary},
    )


SCHEDULE_TEMPLATES: Dict[str, Callable[[str, Optional[random.Random]], NPCSchedule]] = {
    "innkeeper": _rows_schedule(INNKEEPER_ROWS),
    "bartender": _rows_schedule(INNKEEPER_ROWS),
    "tavern keeper": _rows_schedule(INNKEEPER_ROWS),
    "merchant": _rows_schedule(MERCHANT_ROWS),
    "shopkeeper": _rows_schedule(MERCHANT_ROWS),
    "vendor": _rows_schedule(MERCHANT_ROWS),
    "guard": _guard_schedule,
    "town guard": _guard_schedule,
    "city guard": _guard_schedule,
    "watchman": _guard_schedule,
    "farmer": _farmer_schedule,
    "blacksmith": _rows_schedule(BLACKSMITH_ROWS),
    "smith": _rows_schedule(BLACKSMITH_ROWS),
    "priest": _priest_schedule,
    "cleric": _priest_schedule,
    "temple keeper": _priest_schedule,
    "noble": _rows_schedule(NOBLE_ROWS),
    "aristocrat": _rows_schedule(NOBLE_ROWS),
    "beggar": _rows_schedule(BEGGAR_ROWS),
    "homeless": _rows_schedule(BEGGAR_ROWS),
    "traveler": _rows_schedule(TRAVELER_ROWS),
    "visitor": _rows_schedule(TRAVELER_ROWS),
}


def create_default_schedule(primary_location: str) -> NPCSchedule:
    """직업 불명 NPC용 주야 기본 일과"""
    return NPCSchedule(base_entries=_build(DEFAULT_ROWS, primary_location))


def get_schedule_for_occupation(
    occupation: Optional[str],
    primary_location: str,
    rng: Optional[random.Random] = None,
) -> NPCSchedule:
    """직업 키로 템플릿 선택. 모르는 직업이면 기본 일과."""
    if not occupation:
        return create_default_schedule(primary_location)
    factory = SCHEDULE_TEMPLATES.get(occupation.lower().strip())
    if factory is None:
        return create_default_schedule(primary_location)
    return factory(primary_location, rng)
