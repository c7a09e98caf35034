# run_server.py
import uvicorn
from inquiry.main import app

if __name__ == "__main__":
    # The inquiry screens proxy /api to port 3240 on the hosting server
    uvicorn.run(
        app,
        host="127.0.0.1",
        port=3240,
        log_level="info",
    )
