import pytest

from core.vocabulary import ItemType, PropertyStatus, TaskPriority, TaskStatus
from services.extractors import (
    extract_description,
    extract_fields,
    extract_fundraiser,
    extract_item_type,
    extract_location,
    extract_price,
    extract_priority,
    extract_property_status,
    extract_quantity,
    extract_status,
    extract_tags,
    extract_title,
)


# ---------------------------------------------------------------------
# Title
# ---------------------------------------------------------------------

def test_named_title_drops_trailing_location():
    text = "Create a new project called Willow Creek Farm in Oregon, owned land"
    assert extract_title(text) == "Willow Creek Farm"


def test_quoted_title_is_taken_verbatim():
    text = 'Add a task called "Fix the fence in the north paddock" by Friday'
    assert extract_title(text) == "Fix the fence in the north paddock"


def test_remind_me_title_drops_deadline():
    assert extract_title("Remind me to water the garden tomorrow") == "water the garden"


def test_remind_me_title_drops_project_clause():
    text = "Remind me to prune the apple trees for the project Willow Creek"
    assert extract_title(text) == "prune the apple trees"


def test_title_drops_project_named_before_the_keyword():
    text = "Remind me to water the garden for the Willow Creek project"
    assert extract_title(text) == "water the garden"


def test_create_title():
    assert extract_title("Add 3 bags of mulch") == "3 bags of mulch"


def test_title_falls_back_to_whole_utterance():
    assert extract_title("  Help with executive summary  ") == "Help with executive summary"


# ---------------------------------------------------------------------
# Priority / status
# ---------------------------------------------------------------------

@pytest.mark.parametrize(
    "text, expected",
    [
        ("this is urgent", TaskPriority.URGENT),
        ("fix the pump asap", TaskPriority.URGENT),
        ("important: call the vet", TaskPriority.HIGH),
        ("high priority fence repair", TaskPriority.HIGH),
        ("low priority, whenever", TaskPriority.LOW),
        ("medium priority, mend the gate", TaskPriority.MEDIUM),
        ("normal priority", TaskPriority.MEDIUM),
        ("not urgent", TaskPriority.LOW),
        ("not important at all", TaskPriority.LOW),
        ("this can wait", TaskPriority.LOW),
        ("weed the beds", TaskPriority.MEDIUM),
    ],
)
def test_priority(text, expected):
    assert extract_priority(text) == expected


@pytest.mark.parametrize(
    "text, expected",
    [
        ("I already started the compost pile", TaskStatus.IN_PROGRESS),
        ("fence repair in progress", TaskStatus.IN_PROGRESS),
        ("the seed order is done", TaskStatus.DONE),
        ("stuck waiting on parts", TaskStatus.BLOCKED),
        ("put it on hold", TaskStatus.BLOCKED),
        ("plant the garlic", TaskStatus.TODO),
    ],
)
def test_status(text, expected):
    assert extract_status(text) == expected


# ---------------------------------------------------------------------
# Quantity / price
# ---------------------------------------------------------------------

@pytest.mark.parametrize(
    "text, expected",
    [
        ("I need 5 bags of compost", 5),
        ("get 20 kg of lime", 20),
        ("qty of 12 stakes", 12),
        ("quantity 8 posts", 8),
        ("we need 7 hoes", 7),
        ("I need 1,000 units of mulch", 1000),
        ("we need 2,500", 2500),
        ("buy a shovel", 1),
    ],
)
def test_quantity(text, expected):
    assert extract_quantity(text) == expected


@pytest.mark.parametrize(
    "text, expected",
    [
        ("compost for $40", 40.0),
        ("a tank for $1,200.50", 1200.5),
        ("about 30 dollars", 30.0),
        ("it costs 15.5", 15.5),
        ("price of 20 per roll", 20.0),
        ("worth $75", 75.0),
        ("a bag of compost", None),
    ],
)
def test_price(text, expected):
    assert extract_price(text) == expected


# ---------------------------------------------------------------------
# Item type / property status / fundraiser
# ---------------------------------------------------------------------

@pytest.mark.parametrize(
    "text, expected",
    [
        ("I have a wheelbarrow", ItemType.OWNED_RESOURCE),
        ("we bought a chipper", ItemType.OWNED_RESOURCE),
        ("borrowed a tiller from Sam", ItemType.BORROWED_OR_RENTAL),
        ("rental tiller for the weekend", ItemType.BORROWED_OR_RENTAL),
        ("need a tiller", ItemType.NEEDED_SUPPLY),
        ("fencing wire for the owned land", ItemType.NEEDED_SUPPLY),
    ],
)
def test_item_type(text, expected):
    assert extract_item_type(text) == expected


def test_property_status():
    assert extract_property_status("a food forest on our land") == PropertyStatus.OWNED_LAND
    assert extract_property_status("Willow Creek, owned land") == PropertyStatus.OWNED_LAND
    assert extract_property_status("a site we are looking at") == PropertyStatus.POTENTIAL_PROPERTY


def test_fundraiser():
    assert extract_fundraiser("greenhouse panels, we need to raise money") is True
    assert extract_fundraiser("greenhouse panels") is False


# ---------------------------------------------------------------------
# Free-text fields
# ---------------------------------------------------------------------

def test_location_keeps_casing_and_stops_at_punctuation():
    text = "Create a new project called Willow Creek Farm in Oregon, owned land"
    assert extract_location(text) == "Oregon"
    assert extract_location("A market garden near Lake Tahoe. Soon") == "Lake Tahoe"
    assert extract_location("A market garden") is None


def test_tags_are_split_and_lowercased():
    assert extract_tags("Seed potatoes tagged with Compost, soil and Garden") == [
        "compost",
        "soil",
        "garden",
    ]


def test_empty_tags_are_dropped():
    assert extract_tags("straw bales tags mulch,, straw") == ["mulch", "straw"]
    assert extract_tags("straw bales") == []


def test_description_stops_at_period():
    text = "Gloves described as Heavy duty leather. For winter"
    assert extract_description(text) == "Heavy duty leather"
    assert extract_description("Gloves") is None


# ---------------------------------------------------------------------
# Extractors are independent of each other
# ---------------------------------------------------------------------

def test_extract_fields_runs_every_extractor(monday):
    text = "I need 5 bags of compost for $40, urgent, tomorrow, tags soil and compost"

    fields = extract_fields(text, monday)

    assert fields.quantity == 5
    assert fields.price == 40.0
    assert fields.priority == TaskPriority.URGENT
    assert fields.due_date.isoformat() == "2026-10-20"
    assert fields.tags == ["soil", "compost"]
    assert fields.item_type == ItemType.NEEDED_SUPPLY
    assert fields.title == text
