import os
from dotenv import load_dotenv

load_dotenv()

db_backend = os.getenv("DB_BACKEND", "postgres")
user = os.getenv("DB_USER", "postgres")
password = os.getenv("DB_PASSWORD", "postgres")
host = os.getenv("DB_HOST", "localhost")
port = os.getenv("DB_PORT", "5432")
db_name = os.getenv("DB_NAME", "gig_engine")
sqlite_path = os.getenv("SQLITE_PATH", "gig_engine.sqlite3")

# Seconds of real time per stage duration unit.
stage_time_scale = float(os.getenv("STAGE_TIME_SCALE", "0.5"))
settlement_retry_minutes = int(os.getenv("SETTLEMENT_RETRY_MINUTES", "10"))

if __name__ == "__main__":
    print(db_backend, user, host, port, db_name, sqlite_path, stage_time_scale)
