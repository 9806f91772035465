from dataclasses import dataclass

@dataclass(frozen=True)
class ProgressSnapshot:
    total_files: int
    completed_files: int
    total_bytes: int
    transferred_bytes: int
    current_speed_mbps: str # Display text, e.g. "12.5 MB/s"
    estimated_time_text: str
    current_file: str
    progress_percent: float # 0-100
    progress_text: str
    status_text: str
