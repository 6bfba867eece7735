import os
from pathlib import Path

STORAGE_BACKEND = os.getenv("STORAGE_BACKEND", "fs")  # 'fs' or 's3'
DATA_DIR = os.getenv("DATA_DIR", str(Path(__file__).resolve().parent / "data"))
S3_BUCKET = os.getenv("S3_BUCKET", "beadgrid-patterns")
S3_ENDPOINT_URL = os.getenv("S3_ENDPOINT_URL", "http://minio:9000")
S3_ACCESS_KEY = os.getenv("S3_ACCESS_KEY", "minioadmin")
S3_SECRET_KEY = os.getenv("S3_SECRET_KEY", "minioadmin")

AUTOSAVE_KEY = os.getenv("BEADGRID_AUTOSAVE_KEY", "lumiloop-kandi-v2")
STRICT_IMPORT = os.getenv("BEADGRID_STRICT_IMPORT", "0").lower() in {"1", "true", "yes"}
DEVICE_PIXEL_RATIO = float(os.getenv("BEADGRID_DEVICE_PIXEL_RATIO", "1"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
