import csv
import io

import pytest

from lexicon.dictionary import LanguageCode

TITLE_ROW = [
    "id",
    "sem_id",
    "category",
    "topic",
    "sub_topic",
    "sub_sub_topic",
    "essential",
    "basic",
] + [lang.value for lang in LanguageCode]

# total, sem, six blank columns, then one count per language.
COUNTERS_ROW = ["100.000", "50", "", "", "", "", "", ""] + [str(i + 1) for i in range(len(LanguageCode))]


def entry_row(entry_id, sem_id="", topic="", essential="", basic="", category="", **texts):
    row = [str(entry_id), str(sem_id), category, topic, "", "", essential, basic]
    row += [texts.get(lang.value, "") for lang in LanguageCode]
    return row


def build_feed(rows, counters=None, title=None) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(title if title is not None else TITLE_ROW)
    writer.writerow(counters if counters is not None else COUNTERS_ROW)
    writer.writerow(["reserved"] + [""] * (len(TITLE_ROW) - 1))
    for row in rows:
        writer.writerow(row)
    return buffer.getvalue()


SAMPLE_ROWS = [
    entry_row(1, sem_id=10, topic="animals", essential="e", eng="Dog", ita="cane", fra="chien", spa="perro"),
    entry_row(2, sem_id=10, topic="animals", basic="b", eng="Hound", ita="segugio"),
    entry_row(3, topic="food", eng="Bread", ita="pane", lat="panis"),
    entry_row(4, sem_id=20, topic="not-a-topic", eng="Water", ita="acqua", lat="aqua"),
    entry_row(5, sem_id=20, topic=" Food ", eng="Wine", ita="vino", lat="vinum"),
]


@pytest.fixture
def entry_row_factory():
    return entry_row


@pytest.fixture
def feed_factory():
    return build_feed


@pytest.fixture
def sample_feed():
    return build_feed(SAMPLE_ROWS)
