from dataclasses import dataclass
from typing import Optional


@dataclass
class configDatabaseData:
    url : Optional[str] = None
    host : str = ""
    user : str = ""
    password : str = ""
    port : str = "5432"
    dbname : str = "diwise"
    sslmode : str = "disable"
    pool_size : int = 5

@dataclass
class configData:
    database : configDatabaseData
    rec_input_file : str = "/opt/diwise/config/rec.csv"
    api_path : Optional[str] = None
    dedup_window_seconds : int = 60
