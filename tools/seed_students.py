"""Nạp danh sách sinh viên từ file CSV (id,name,email) vào storage đang cấu hình."""

import argparse
import csv
from pathlib import Path
import sys

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from dotenv import load_dotenv


def build_parser():
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument('csv_path', type=Path, help='File CSV có header id,name,email')
    parser.add_argument(
        '--sqlite',
        metavar='PATH',
        help='Ghi vào file SQLite thay vì backend trong cấu hình',
    )
    return parser


def open_database(sqlite_path=None):
    from app import config
    from database import DatabaseManager

    if sqlite_path or config.STORAGE_BACKEND == 'sqlite':
        return DatabaseManager(sqlite_path or config.DATABASE_PATH)
    if not config.SUPABASE_URL or not config.SUPABASE_KEY:
        raise SystemExit("SUPABASE_URL / SUPABASE_KEY not set")
    from supabase_store import SupabaseDatabase
    return SupabaseDatabase(config.SUPABASE_URL, config.SUPABASE_KEY)


def read_students(csv_path):
    with open(csv_path, newline='', encoding='utf-8') as handle:
        for row in csv.DictReader(handle):
            student_id = (row.get('id') or '').strip()
            name = (row.get('name') or '').strip()
            if not student_id or not name:
                continue
            yield student_id, name, (row.get('email') or '').strip() or None


def seed(database, students):
    created = skipped = 0
    for student_id, name, email in students:
        if database.add_student(student_id, name, email):
            created += 1
        else:
            skipped += 1
    return {'created': created, 'skipped': skipped}


def main(argv=None):
    load_dotenv()
    args = build_parser().parse_args(argv)
    database = open_database(args.sqlite)
    summary = seed(database, read_students(args.csv_path))
    print("Hoàn tất nạp sinh viên:")
    print(f"  - Sinh viên mới: {summary['created']}")
    print(f"  - Đã tồn tại: {summary['skipped']}")


if __name__ == "__main__":
    main()
