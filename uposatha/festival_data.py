"""Static festival tables for the three traditions.

Theravada purnima observances carry the historical events kept in
``data/theravada_purnima.json``; everything else is literal data.
"""
from __future__ import annotations

import json
from datetime import date
from functools import lru_cache
from typing import Dict, Tuple

from . import config
from .models import FestivalEvent, MahayanaFestival, TheravadaFestival, VajrayanaFestival

VIJAYADASHAMI_ID = "ashoka_vijayadashami"


@lru_cache(maxsize=1)
def load_purnima_records() -> Dict[int, dict]:
    """masa index -> purnima record (month names and key events)."""
    path = config.FESTIVAL_DATA_DIR / "theravada_purnima.json"
    with path.open("r", encoding="utf-8") as fh:
        records = json.load(fh)
    return {int(r["masa_index"]): r for r in records}


def purnima_events(masa_index: int) -> Tuple[FestivalEvent, ...]:
    record = load_purnima_records().get(masa_index)
    if record is None:
        return ()
    return tuple(FestivalEvent(**event) for event in record.get("key_events", []))


# (id, name, masa index, description, region)
_PURNIMA_OBSERVANCES = [
    ("chaitra_purnima", "Chaitra Pūrṇimā", 0,
     "Full moon of Caitra, remembered for the first of the Four Signs and the Buddha's second visit to Laṅkā.",
     "South & Southeast Asia"),
    ("vesak", "Vesak", 1,
     "Celebrates the Birth, Enlightenment, and Parinirvana of the Buddha. The most sacred day in the Buddhist calendar.",
     "Sri Lanka, Myanmar, Thailand, India"),
    ("poson", "Poson Pūjā", 2,
     "Arrival of the Arahant Mahinda in Sri Lanka and the establishment of the Sāsana on the island.",
     "Sri Lanka"),
    ("asalha_puja", "Āsāḷha Pūjā", 3,
     "Marks the Buddha's first sermon (Dhammacakkappavattana Sutta) and the eve of Vassa (Rains Retreat).",
     "Thailand, Laos, Sri Lanka, Myanmar"),
    ("nikini", "Nikini Pūjā", 4,
     "Holding of the First Council at Rājagaha and the start of the deferred Vassa.",
     "Sri Lanka"),
    ("binara", "Binara Pūjā", 5,
     "The Buddha's visit to Kapilavatthu's heaven realm and the founding of the Bhikkhunī Sangha.",
     "Sri Lanka"),
    ("pavarana", "Pavāraṇā", 6,
     "End of the Rains Retreat; the Buddha's descent from Tāvatiṃsa after teaching the Abhidhamma.",
     "Myanmar, Thailand, Laos, Sri Lanka"),
    ("il_puja", "Il Pūjā", 7,
     "Close of the Kaṭhina season; sending forth the first sixty Arahants to teach.",
     "Sri Lanka, Myanmar"),
    ("unduvap", "Unduvap Pūjā", 8,
     "Arrival of Sanghamittā Therī with the southern branch of the Bodhi tree.",
     "Sri Lanka"),
    ("duruthu", "Duruthu Pūjā", 9,
     "The Buddha's first visit to Laṅkā at Mahiyangana.",
     "Sri Lanka"),
    ("magha_puja", "Māgha Pūjā", 10,
     "Commemorates the spontaneous gathering of 1,250 Arahants before the Buddha. Celebrates the qualities of the Sangha.",
     "Thailand, Laos, Cambodia, Myanmar"),
    ("medin", "Medin Pūjā", 11,
     "The Buddha's return to Kapilavatthu and his first meeting with his family after the Awakening.",
     "Sri Lanka"),
]


THERAVADA_FIXED = (
    TheravadaFestival(
        id="ambedkar_jayanti", name="Ambedkar Jayanti",
        description="Birth anniversary of Dr. B. R. Ambedkar, who led the Navayana Buddhist revival in India.",
        region="India", month=4, day=14,
    ),
    TheravadaFestival(
        id="dhamma_diksha_day", name="Dhamma Diksha Day",
        description="Anniversary of the 1956 mass conversion to Buddhism at Deekshabhoomi, Nagpur.",
        region="India", month=10, day=14,
    ),
    TheravadaFestival(
        id="mahaparinirvan_din", name="Mahaparinirvan Din",
        description="Remembrance of Dr. B. R. Ambedkar's passing, observed at Chaitya Bhoomi, Mumbai.",
        region="India", month=12, day=6,
    ),
)

VIJAYADASHAMI_FESTIVAL = TheravadaFestival(
    id=VIJAYADASHAMI_ID, name="Dhammachakra Pravartan Din",
    description="Ashoka Vijayadashami: remembrance of Emperor Ashoka's embrace of the Dhamma and of the 1956 Deekshabhoomi conversion.",
    region="India", masa_index=6, tithi=9, also_known_as="Ashoka Vijayadashami",
)


@lru_cache(maxsize=1)
def theravada_lunar_festivals() -> Tuple[TheravadaFestival, ...]:
    """Masa + tithi table in match order."""
    records = load_purnima_records()
    table = []
    for fid, name, masa, desc, region in _PURNIMA_OBSERVANCES:
        record = records.get(masa, {})
        table.append(TheravadaFestival(
            id=fid, name=name, description=desc, region=region,
            events=purnima_events(masa), masa_index=masa, tithi=14,
            also_known_as=record.get("also_known_as"), month_hi=record.get("month_hi"),
        ))
        if masa == 3:
            table.append(TheravadaFestival(
                id="esala_perahera", name="Esala Perahera",
                description="Ten nights of procession honouring the Sacred Tooth Relic in Kandy, culminating before the Āsāḷha full moon.",
                region="Sri Lanka", masa_index=3, tithi_range=(4, 13),
            ))
            table.append(TheravadaFestival(
                id="vassa_start", name="Vassa Begins",
                description="First day of the three-month Rains Retreat (Vassūpanāyika).",
                region="South & Southeast Asia", masa_index=3, tithi=15,
            ))
    return tuple(table)


MAHAYANA_FIXED = (
    MahayanaFestival(
        id="nirvana_day", name="Nirvana Day",
        description="Commemorates the Buddha's Parinirvana at Kusinara.",
        region="Japan, East Asia", month=2, day=15,
    ),
    MahayanaFestival(
        id="hanamatsuri", name="Hanamatsuri",
        description="Japanese flower festival for the Buddha's birth; images are bathed in sweet tea.",
        region="Japan", month=4, day=8,
    ),
    MahayanaFestival(
        id="bodhi_day", name="Bodhi Day",
        description="Rohatsu: the Buddha's Awakening under the Bodhi tree.",
        region="Japan, East Asia", month=12, day=8,
    ),
)

MAHAYANA_LUNAR = (
    MahayanaFestival(
        id="maitreya_birthday", name="Maitreya Bodhisattva's Birthday",
        description="Honours the future Buddha Maitreya on the first day of the lunar new year.",
        region="China, Taiwan", lunar_month=1, lunar_day=1,
    ),
    MahayanaFestival(
        id="guanyin_birthday", name="Guanyin's Birthday",
        description="Birth of Avalokiteśvara (Guanyin), Bodhisattva of compassion.",
        region="China, Taiwan, Vietnam", lunar_month=2, lunar_day=19,
    ),
    MahayanaFestival(
        id="buddha_birthday", name="Buddha's Birthday",
        description="Bathing the Buddha ceremony on the eighth day of the fourth lunar month.",
        region="China, Korea, Taiwan, Vietnam", lunar_month=4, lunar_day=8,
    ),
    MahayanaFestival(
        id="guanyin_enlightenment", name="Guanyin's Enlightenment",
        description="Day of Avalokiteśvara's awakening.",
        region="China, Taiwan", lunar_month=6, lunar_day=19,
    ),
    MahayanaFestival(
        id="ullambana", name="Ullambana",
        description="Ghost festival offering merit to ancestors, after Maudgalyāyana's rescue of his mother.",
        region="China, Japan, Korea, Vietnam", lunar_month=7, lunar_day=15,
    ),
    MahayanaFestival(
        id="guanyin_renunciation", name="Guanyin's Renunciation",
        description="Day Avalokiteśvara left household life.",
        region="China, Taiwan", lunar_month=9, lunar_day=19,
    ),
    MahayanaFestival(
        id="amitabha_birthday", name="Amitābha Buddha's Birthday",
        description="Birthday of Amitābha, Buddha of the Pure Land.",
        region="China, Taiwan", lunar_month=11, lunar_day=17,
    ),
    MahayanaFestival(
        id="laba", name="Laba Festival",
        description="The Buddha's Enlightenment, marked with Laba congee on the eighth day of the twelfth lunar month.",
        region="China", lunar_month=12, lunar_day=8,
    ),
)

# Tibetan dates converted offline; years outside each table never match.
VAJRAYANA_FESTIVALS = (
    VajrayanaFestival(
        id="losar", name="Losar",
        description="Tibetan New Year, opening the first month with prayers and offerings.",
        region="Tibet, Bhutan, Nepal, Himalayan India",
        tibetan_month=1, tibetan_day=1,
        dates={2024: date(2024, 2, 10), 2025: date(2025, 2, 28),
               2026: date(2026, 2, 18), 2027: date(2027, 2, 7)},
    ),
    VajrayanaFestival(
        id="chotrul_duchen", name="Chötrul Düchen",
        description="Day of Miracles: the Buddha's fifteen days of miraculous displays at Śrāvastī.",
        region="Tibet, Bhutan, Nepal, Himalayan India",
        tibetan_month=1, tibetan_day=15,
        dates={2024: date(2024, 2, 24), 2025: date(2025, 3, 14),
               2026: date(2026, 3, 3), 2027: date(2027, 2, 21)},
    ),
    VajrayanaFestival(
        id="saga_dawa_duchen", name="Saga Dawa Düchen",
        description="The Buddha's Birth, Enlightenment and Parinirvana, on the full moon of Saga Dawa.",
        region="Tibet, Bhutan, Nepal, Himalayan India",
        tibetan_month=4, tibetan_day=15,
        dates={2024: date(2024, 5, 23), 2025: date(2025, 6, 11),
               2026: date(2026, 5, 31), 2027: date(2027, 5, 20)},
    ),
    VajrayanaFestival(
        id="chokhor_duchen", name="Chökhor Düchen",
        description="First Turning of the Wheel of Dharma at Sarnath.",
        region="Tibet, Bhutan, Nepal, Himalayan India",
        tibetan_month=6, tibetan_day=4,
        dates={2024: date(2024, 7, 10), 2025: date(2025, 7, 28),
               2026: date(2026, 7, 18), 2027: date(2027, 7, 8)},
    ),
    VajrayanaFestival(
        id="lhabab_duchen", name="Lhabab Düchen",
        description="The Buddha's descent from the Heaven of the Thirty-Three.",
        region="Tibet, Bhutan, Nepal, Himalayan India",
        tibetan_month=9, tibetan_day=22,
        dates={2024: date(2024, 11, 22), 2025: date(2025, 11, 11),
               2026: date(2026, 11, 1), 2027: date(2027, 10, 21)},
    ),
)
