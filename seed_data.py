#!/usr/bin/env python3

import argparse
import random
from typing import List, Optional, Tuple

from src.database import SessionLocal, init_db
from src.models import Station, Train, TrainStop
from src.search.timetable import minutes_to_time
from src.stations.service import StationService
from src.trains.schemas import StopCreate
from src.trains.service import TrainService

# (station, distance from previous stop in km, departure time)
ScheduleRow = Tuple[str, int, str]

EXAMPLE_TRAINS: List[Tuple[str, List[ScheduleRow]]] = [
    ("Train A", [
        ("Chennai", 0, "09:00"),
        ("Vellore", 170, "11:00"),
        ("Bangalore", 200, "15:30"),
        ("Mysuru", 120, "17:30"),
        ("Mangalore", 300, "21:45"),
    ]),
    ("Train B", [
        ("Bangalore", 0, "09:00"),
        ("Shimoga", 180, "12:00"),
        ("Mangalore", 250, "17:30"),
    ]),
    ("Train C", [
        ("Bangalore", 0, "16:00"),
        ("Shimoga", 180, "19:00"),
        ("Mangalore", 250, "23:45"),
    ]),
]

STATION_NAMES = [
    'Mumbai Central', 'Delhi Junction', 'Bangalore City', 'Chennai Central', 'Kolkata Howrah',
    'Hyderabad Deccan', 'Ahmedabad Junction', 'Pune Junction', 'Jaipur Junction', 'Lucknow Junction',
    'Kanpur Central', 'Nagpur Junction', 'Indore Junction', 'Bhopal Junction', 'Patna Junction',
    'Varanasi Junction', 'Amritsar Junction', 'Chandigarh Junction', 'Dehradun Junction', 'Shimla',
    'Mysuru Junction', 'Mangalore Junction', 'Vellore Junction', 'Shimoga Junction', 'Hubli Junction',
    'Belgaum Junction', 'Gulbarga Junction', 'Bidar Junction', 'Nanded Junction', 'Aurangabad Junction',
    'Jalgaon Junction', 'Bhusaval Junction', 'Akola Junction', 'Wardha Junction', 'Gondia Junction',
    'Raipur Junction', 'Bilaspur Junction', 'Jabalpur Junction', 'Bina Junction', 'Gwalior Junction',
    'Agra Cantonment', 'Mathura Junction', 'Aligarh Junction', 'Bareilly Junction', 'Moradabad Junction',
    'Meerut City', 'Ghaziabad Junction', 'Faridabad Junction', 'Gurgaon Junction', 'Sonipat Junction',
    'Panipat Junction', 'Karnal Junction', 'Kurukshetra Junction', 'Ambala Cantonment', 'Ludhiana Junction',
    'Jalandhar City', 'Pathankot Junction', 'Udhampur Junction', 'Jammu Tawi', 'Srinagar',
    'Udaipur City', 'Jodhpur Junction', 'Bikaner Junction', 'Ajmer Junction', 'Kota Junction',
    'Jhansi Junction', 'Etawah Junction', 'Tundla Junction', 'Rewari Junction', 'Ratlam Junction',
    'Vadodara Junction', 'Surat Junction', 'Valsad Junction', 'Bandra Terminus', 'Dadar Junction',
    'Thane Junction', 'Kalyan Junction', 'Lonavala Junction', 'Daund Junction', 'Manmad Junction',
    'Katni Junction', 'Satna Junction', 'Prayagraj Junction', 'Gaya Junction', 'Ranchi Junction',
    'Tatanagar Junction', 'Rourkela Junction', 'Sambalpur Junction', 'Durg Junction', 'Bhubaneswar Junction',
    'Cuttack Junction', 'Puri Junction', 'Visakhapatnam Junction', 'Rajahmundry Junction', 'Vijayawada Junction',
    'Guntur Junction', 'Nellore Junction', 'Chengalpattu Junction', 'Tambaram Junction', 'Chennai Egmore',
]

class ScheduleWriter:
    """Adds trains to a session through the schedule services"""

    def __init__(self, db):
        self.db = db
        self.trains = TrainService(db)
        self.train_count = 0

    @property
    def station_count(self) -> int:
        return self.db.query(Station).count()

    def station(self, name: str) -> Station:
        return StationService.get_or_create_station(self.db, name)

    def add_train(self, name: str, rows: List[ScheduleRow]) -> Train:
        stops = [
            StopCreate(station=station, distance_from_prev_km=distance, departure_time=departure)
            for station, distance, departure in rows
        ]
        train = self.trains.add_train(name, stops)
        self.train_count += 1
        return train

def reset(db):
    db.query(TrainStop).delete()
    db.query(Train).delete()
    db.query(Station).delete()

def seed_example(db) -> ScheduleWriter:
    """Three trains across South India sharing Bangalore, Shimoga and Mangalore"""
    reset(db)
    writer = ScheduleWriter(db)
    for name, rows in EXAMPLE_TRAINS:
        writer.add_train(name, rows)
    return writer

def seed_random(db, trains: int = 1000, stations: int = 200, rng: Optional[random.Random] = None) -> ScheduleWriter:
    """Random trains over named stations, plus guaranteed routes between major cities"""
    rng = rng or random.Random()
    reset(db)
    writer = ScheduleWriter(db)

    names = STATION_NAMES[:max(0, min(stations, len(STATION_NAMES)))]
    for name in names:
        writer.station(name)

    for t in range(trains if names else 0):
        current_time = rng.randint(4 * 60, 22 * 60)
        position = rng.randrange(len(names))
        rows = [(names[position], 0, minutes_to_time(current_time))]
        for _ in range(1, rng.randint(3, 8)):
            current_time += rng.randint(15, 120)
            position = (position + rng.randint(1, max(1, min(5, len(names) - position)))) % len(names)
            rows.append((names[position], rng.randint(20, 150), minutes_to_time(current_time)))
        writer.add_train(f"Train {t + 1}", rows)

    # Express services between the first 20 stations
    major = names[:20]
    for i in range(50 if len(major) > 1 else 0):
        origin, destination = rng.sample(major, 2)
        depart = rng.randint(6 * 60, 20 * 60)
        writer.add_train(f"Express {i + 1}", [
            (origin, 0, minutes_to_time(depart)),
            (destination, rng.randint(50, 300), minutes_to_time(depart + rng.randint(30, 180))),
        ])

    # Several direct trains between every pair of the ten largest cities
    cities = names[:10]
    for i, origin in enumerate(cities):
        for destination in cities[i + 1:]:
            for t in range(rng.randint(3, 5)):
                depart = rng.randint(6 * 60, 20 * 60)
                writer.add_train(f"{origin.split(' ')[0]}-{destination.split(' ')[0]} Express {t + 1}", [
                    (origin, 0, minutes_to_time(depart)),
                    (destination, rng.randint(100, 800), minutes_to_time(depart + rng.randint(60, 300))),
                ])

    # Short regional hops
    regional = names[10:20]
    for i in range(100 if len(regional) > 1 else 0):
        origin, destination = rng.sample(regional, 2)
        depart = rng.randint(5 * 60, 21 * 60)
        writer.add_train(f"Regional {i + 1}", [
            (origin, 0, minutes_to_time(depart)),
            (destination, rng.randint(30, 200), minutes_to_time(depart + rng.randint(20, 120))),
        ])

    return writer

def main():
    parser = argparse.ArgumentParser(description="Seed the train schedule database")
    parser.add_argument("mode", nargs="?", choices=["example", "random"], default="example")
    parser.add_argument("--trains", type=int, default=1000, help="Random trains to generate")
    parser.add_argument("--stations", type=int, default=200, help="Maximum stations to use")
    parser.add_argument("--seed", type=int, default=None, help="Random seed for reproducible data")
    args = parser.parse_args()
    if args.mode == "random" and args.stations < 2:
        parser.error("--stations must be at least 2")

    init_db()
    db = SessionLocal()

    try:
        if args.mode == "random":
            writer = seed_random(db, trains=args.trains, stations=args.stations, rng=random.Random(args.seed))
        else:
            writer = seed_example(db)
        db.commit()
        print(f"✅ Seeded {args.mode} data: {writer.train_count} trains, {writer.station_count} stations")
    except Exception as e:
        print(f"❌ Error creating seed data: {e}")
        db.rollback()
        raise
    finally:
        db.close()

if __name__ == "__main__":
    main()
