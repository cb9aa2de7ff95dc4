import argparse
import base64
import logging
from typing import Any, Dict, Optional

from fastapi import FastAPI, HTTPException, Response
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from config import load_settings
from errors import EmptyResultsError
from graph import build_graph
from log_config import setup_logging


settings = load_settings()
setup_logging(settings)
logger = logging.getLogger(__name__)

app = FastAPI(title="CAF API", version="1.0")

# ---- CORS (frontend can call API) ----
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # for demo; lock down later
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

graph = build_graph(settings)

MAX_QUERY_CHARS = 2000
DOCX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"


# -----------------------
# Models
# -----------------------
class AnalyzeRequest(BaseModel):
    query: str
    question: Optional[str] = None
    model_choice: Optional[str] = None


class AnalyzeResponse(BaseModel):
    formatted_answer: str
    citations: Dict[str, str]
    docx_buffer: str  # base64


# -----------------------
# Pipeline runner
# -----------------------
def _run_pipeline(req: AnalyzeRequest) -> Dict[str, Any]:
    q = (req.query or "").strip()
    if not q:
        logger.error("Query is undefined or empty")
        raise HTTPException(status_code=400, detail="Search query is required")

    if len(q) > MAX_QUERY_CHARS:
        q = q[:MAX_QUERY_CHARS]

    try:
        final_state: Dict[str, Any] = graph.invoke({
            "query": q,
            "question": req.question,
            "model_choice": req.model_choice,
        })
    except EmptyResultsError:
        logger.warning("No search results found")
        raise HTTPException(status_code=404, detail="No search results found")
    except Exception as e:
        logger.error("Error during analysis: %s", e)
        raise HTTPException(status_code=500, detail=f"An error occurred during analysis: {e}")

    logger.info("Analysis completed successfully for query: %s", q)
    return final_state


def _safe_filename(title: str) -> str:
    safe = "".join(ch for ch in (title or "") if ch.isalnum() or ch in (" ", "_", "-")).strip() or "answer"
    return safe.replace(" ", "_")[:80]


# -----------------------
# API
# -----------------------
@app.get("/health")
def health() -> Dict[str, str]:
    return {"status": "OK", "message": "Server is running"}


@app.post("/analyze", response_model=AnalyzeResponse)
def analyze(req: AnalyzeRequest) -> AnalyzeResponse:
    state = _run_pipeline(req)
    return AnalyzeResponse(
        formatted_answer=state["formatted_answer"],
        citations=state["citations"],
        docx_buffer=base64.b64encode(state["docx_bytes"]).decode("ascii"),
    )


@app.post("/analyze/docx")
def analyze_docx(req: AnalyzeRequest):
    state = _run_pipeline(req)
    safe_title = _safe_filename(req.query)
    return Response(
        content=state["docx_bytes"],
        media_type=DOCX_MEDIA_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{safe_title}.docx"'}
    )


# -----------------------
# CLI (optional)
# -----------------------
def main_cli():
    parser = argparse.ArgumentParser(description="CAF server (FastAPI) + quick CLI")
    parser.add_argument("--serve", action="store_true", help="Hint to run uvicorn.")
    parser.add_argument("--query", type=str, help="Run one query and print the HTML.")
    parser.add_argument("--question", type=str, help="Question for the model (defaults to a summary).")
    parser.add_argument("--model", type=str, help="Chat model name.")
    parser.add_argument("--out", type=str, help="Write the .docx here.")
    args = parser.parse_args()

    if args.serve:
        print("Run:\n  uvicorn app:app --reload --workers 1\n")
        return

    if args.query:
        state = graph.invoke({"query": args.query, "question": args.question, "model_choice": args.model})
        print("\n========== HTML ==========\n")
        print(state["formatted_answer"])
        if args.out:
            with open(args.out, "wb") as f:
                f.write(state["docx_bytes"])
            print(f"\nSaved document to {args.out}")
        print("\n========== END ==========\n")
        return

    print("For the API, run the server with uvicorn.")
    print("  uvicorn app:app --reload --workers 1")


if __name__ == "__main__":
    main_cli()
#uvicorn app:app --reload --workers 1
