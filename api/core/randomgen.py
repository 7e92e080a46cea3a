"""
Random contact data for load tests and manual experiments.
"""

from __future__ import annotations

import random
from datetime import datetime, timedelta, timezone

FIRST_NAMES = (
    # male
    "Wade", "Dave", "Seth", "Ivan", "Riley", "Gilbert", "Jorge", "Dan", "Brian", "Roberto",
    "Ramon", "Miles", "Liam", "Nathaniel", "Ethan", "Lewis", "Milton", "Claude", "Joshua", "Glen",
    "Harvey", "Blake", "Noel", "Everett", "Romeo", "Sebastian", "Stefan", "Robin", "Clarence", "Sandy",
    "Ernest", "Samuel", "Benjamin", "Luka", "Fred", "Albert", "Greyson", "Terry", "Cedric", "Joe",
    "Paul", "George", "Bruce", "Christopher", "Stuart", "Orlando", "Keith", "Walter", "Marshall", "Shawn",
    # female
    "Daisy", "Deborah", "Isabel", "Stella", "Debra", "Beverly", "Vera", "Angela", "Lucy", "Lauren",
    "Janet", "Loretta", "Tracey", "Beatrice", "Sabrina", "Melody", "Chrysta", "Christina", "Vicki", "Molly",
    "Alison", "Miranda", "Stephanie", "Leona", "Katrina", "Mila", "Teresa", "Gabriela", "Ashley", "Nicole",
    "Valentina", "Rose", "Juliana", "Alice", "Kathie", "Gloria", "Luna", "Phoebe", "Angelique", "Graciela",
    "Gemma", "Katelynn", "Danna", "Luisa", "Julie", "Olive", "Carolina", "Harmony", "Rachelle", "Kianna",
)

LAST_NAMES = (
    "Salazar", "Combs", "Meadows", "Fischer", "Villegas", "Lucero", "Wilson", "Armstrong", "Irwin", "Dyer",
    "Dorsey", "Thompson", "Decker", "Cherry", "Jensen", "Gutierrez", "Brady", "Middleton", "Buck", "Bond",
    "Douglas", "Ellis", "Singleton", "Roman", "Randolph", "Hull", "Farmer", "Calhoun", "Powers", "Davidson",
    "Ray", "Manning", "Osborn", "Herman", "Forbes", "Horn", "Andrade", "Wade", "Alexander", "Travis",
    "Graves", "Chaney", "Guerra", "Rush", "Kane", "Harrington", "Keith", "Zimmerman", "House", "Haas",
    "Conrad", "Knox", "Horton", "Shea", "Sherman", "Mathis", "Fisher", "Rowland", "Potter", "Brewer",
    "Gentry", "Ponce", "Eaton", "Rivera", "Blackburn", "Mercado", "Holden", "Vaughn", "Salinas", "Fuentes",
    "Kim", "Velasquez", "Giles", "Duran", "Mccall", "Rivas", "Riggs", "Bell", "Wilkinson", "Weiss",
    "Norris", "Ochoa", "Quinn", "Cruz", "Mitchell", "Ashley", "Love", "Pearson", "Logan", "Woodard",
    "Anthony", "Sims", "Farley", "Hebert", "Delgado", "Muller",
)


def pick_first_name(rng: random.Random | None = None) -> str:
    return (rng or random).choice(FIRST_NAMES)


def pick_last_name(rng: random.Random | None = None) -> str:
    return (rng or random).choice(LAST_NAMES)


def pick_phone_number(prefix: str, rng: random.Random | None = None) -> str:
    """
    Nine random digits in groups of three after a country code, e.g. "+1 042 917 300".
    """
    rng = rng or random
    groups = " ".join(f"{rng.randrange(1000):03d}" for _ in range(3))
    return f"{prefix} {groups}"


def pick_birth_date(rng: random.Random | None = None, *, now: datetime | None = None) -> str:
    """
    A UTC timestamp 18 to 77 years, up to 11 months and up to 30 days before `now`.
    """
    rng = rng or random
    now = now or datetime.now(timezone.utc)
    years = rng.randrange(18, 78)
    months = rng.randrange(12)
    days = rng.randrange(31)

    year, month = divmod(now.year * 12 + now.month - 1 - years * 12 - months, 12)
    birthday = datetime(year, month + 1, min(now.day, 28), tzinfo=timezone.utc) - timedelta(days=days)
    return birthday.strftime("%Y-%m-%dT%H:%M:%SZ")


def random_contact(rng: random.Random | None = None) -> dict[str, str]:
    """
    JSON body for `POST /contacts` with every field set.
    """
    return {
        "firstname": pick_first_name(rng),
        "lastname": pick_last_name(rng),
        "phone": pick_phone_number("+1", rng),
        "birthday": pick_birth_date(rng),
    }
