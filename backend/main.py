import os
import sys

# Ensure this directory is in the path for uvicorn and other runners
current_dir = os.path.dirname(os.path.abspath(__file__))
if current_dir not in sys.path:
    sys.path.append(current_dir)

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from database import init_db
from config import ASSISTANT_NAME

from routes.auth_routes import router as auth_router
from routes.journal_routes import router as journal_router
from routes.tts_routes import router as tts_router

init_db()

app = FastAPI(title=f"{ASSISTANT_NAME} Mood Journal")


@app.get("/api/v1/health-check")
async def health():
    return {"status": "ok", "message": "Backend is alive!"}


app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # In production, restrict this to the web client's origin
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(auth_router)
app.include_router(journal_router)
app.include_router(tts_router)

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("main:app", host="0.0.0.0", port=8000, reload=True)
