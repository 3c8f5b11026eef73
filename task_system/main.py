from task_system.app import create_app
from task_system.config import Config
from task_system.logging_setup import setup_logging

setup_logging(Config.LOG_LEVEL)
app = create_app(Config)


def run():
    import uvicorn

    uvicorn.run("task_system.main:app", host="127.0.0.1", port=8000)


# ---------- Run with: uvicorn task_system.main:app --reload ----------
if __name__ == "__main__":
    run()
