from fastapi import FastAPI, UploadFile, File, HTTPException
from .convert import convert_bytes
from .errors import ContentError, FormatError
from .models import ConvertResponse, HealthResponse

app = FastAPI(
    title="interval-csv",
    description="Split CSV interval data out of meter data notification envelopes",
    version="0.1.0",
)

@app.get("/health", response_model=HealthResponse)
def health():
    return {"ok": True}

@app.post("/convert", response_model=ConvertResponse)
async def convert_envelope(file: UploadFile = File(...)):
    if not (file.filename or "").lower().endswith(".xml"):
        raise HTTPException(status_code=422, detail="Only XML files are supported")

    raw = await file.read()
    try:
        return convert_bytes(raw, source=file.filename)
    except (FormatError, ContentError) as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
