"""
FastAPI backend
Serves frequency tables and predictions from the local draw history
"""
from typing import Optional
from fastapi import FastAPI, HTTPException, Query
from ssq_ai.core.engine import analyze_frequency, generate_predictions
from ssq_ai.core.errors import ConfigurationError, InputError
from ssq_ai.data.history import load_history, get_last_update
from ssq_ai.config import logger, CSV_PATH, GAME_NAME
import os

app = FastAPI(title="SSQ AI Backend")


def _load_records():
    records = load_history(CSV_PATH)
    if not records:
        logger.warning(f"No draw history found at {CSV_PATH}")
    return records


@app.get("/")
def health_check():
    """Health check endpoint"""
    last_update = get_last_update(CSV_PATH)
    status = {
        "status": "ok",
        "game": GAME_NAME,
        "records": 0,
        "last_update": last_update.isoformat() if last_update else None,
        "environment": os.getenv("RAILWAY_ENVIRONMENT", "local")
    }
    try:
        status["records"] = len(load_history(CSV_PATH))
    except InputError as e:
        logger.error(f"Draw history at {CSV_PATH} is unreadable: {e}")
        status["status"] = "degraded"
        status["error"] = str(e)
    return status


@app.get("/frequency")
def get_frequency(algorithm: str = Query("hot")):
    """Red and blue frequency tables for one algorithm"""
    try:
        red, blue = analyze_frequency(_load_records(), algorithm)
    except ConfigurationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except InputError as e:
        logger.warning(f"Frequency analysis rejected input: {e}")
        raise HTTPException(status_code=422, detail=str(e))

    return {
        "algorithm": algorithm,
        "red": [f.to_dict() for f in red],
        "blue": [f.to_dict() for f in blue],
    }


@app.get("/predictions")
def get_predictions(algorithm: str = Query("hot"), seed: Optional[int] = Query(None)):
    """Top ranked predictions for one algorithm"""
    try:
        batch = generate_predictions(_load_records(), algorithm, seed=seed)
    except ConfigurationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except InputError as e:
        logger.warning(f"Prediction rejected input: {e}")
        raise HTTPException(status_code=422, detail=str(e))

    if batch.degraded:
        logger.warning(f"Only {batch.count}/{batch.requested} distinct predictions produced")

    return {
        "algorithm": algorithm,
        "predictions": batch.to_list(),
        "count": batch.count,
        "requested": batch.requested,
        "degraded": batch.degraded,
    }


if __name__ == "__main__":
    import uvicorn
    port = int(os.getenv("PORT", 8000))
    uvicorn.run(app, host="0.0.0.0", port=port)
