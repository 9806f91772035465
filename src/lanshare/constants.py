PROGRAM_VERSION = "1.0.0"
WINDOW_TITLE = "LAN File Transfer"
WINDOW_WIDTH = 500
WINDOW_HEIGHT = 650

# Backend readiness polling (seconds)
BACKEND_POLL_INTERVAL = 0.1
BACKEND_POLL_BACKOFF = 1.5
BACKEND_POLL_MAX_INTERVAL = 1.0
BACKEND_MAX_WAIT = 30.0

RESTART_RECEIVE_DELAY = 0.5 # Seconds

# Status texts
STATUS_READY = "Ready"
STATUS_BACKEND_NOT_READY = "Backend not ready"
STATUS_SENDING = "Sending..."
STATUS_RECEIVING = "Receiving..."
STATUS_STARTING_RECEIVE = "Starting receive..."
STATUS_RESTARTING_RECEIVE = "Restarting receive..."
STATUS_COMPLETED = "Operation completed"
STATUS_NO_PATH = "Please select a file or folder to send"
STATUS_IN_PROGRESS = "An operation is already in progress"

# Progress placeholders
ETA_COMPUTING = "Computing..."
SPEED_UNIT = "MB/s"

# Dialog texts
DIALOG_BACKEND_NOT_READY = "Backend not ready, please retry later"
