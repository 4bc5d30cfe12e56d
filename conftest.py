from datetime import datetime

import pytest

from book import Book
from library import Library
from ui_helpers import OUTPUT_MODE_ENV
from user import User


@pytest.fixture(autouse=True)
def plain_output(monkeypatch):
    # CLI çıktı modu ortam değişkeninde tutulur; her test düz metinle başlasın
    monkeypatch.delenv(OUTPUT_MODE_ENV, raising=False)


@pytest.fixture
def lib():
    return Library()


@pytest.fixture
def librarian():
    return User.librarian("Rtan", 30)


@pytest.fixture
def member():
    return User.member("Aspiring Developer", 30)


@pytest.fixture
def other_member():
    return User.member("Bookworm", 28)


@pytest.fixture
def books():
    published = datetime(2024, 7, 1, 4, 3, 12)
    return [
        Book("TS Grammar", "Kang Changmin", published),
        Book("Discipline Guide", "Oh Eunyoung", published),
        Book("Cooking Show", "Baek Jongwon", published),
    ]
