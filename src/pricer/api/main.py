import logging
from dataclasses import asdict

import uvicorn
from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

from pricer.config.settings import get_settings
from pricer.engine import compute_line_discount, compute_line_discountable_amount, compute_line_total, compute_quote_totals
from pricer.engine.line_calculator import base_total, multiplier_adjustment, multiplier_adjustments
from pricer.export.quote_export import summary_rows
from pricer.api.schemas import AdjustmentOut, LineRequest, LineResponse, QuoteIn, TotalsResponse

logger = logging.getLogger(__name__)


def configure_logging(level: str):
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def run():
    """Console entry point: serve the API with host/port/reload from settings."""
    settings = get_settings()
    configure_logging(settings.log_level)
    logger.info("Starting Pricer API on %s:%s", settings.host, settings.port)
    uvicorn.run(
        "pricer.api.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.reload,
        log_level=settings.log_level.lower(),
    )


app = FastAPI(
    title="Pricer API",
    description="Quote line and quote total calculation",
    version="1.0.0"
)

# Enable CORS for frontend development
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/")
async def root():
    return {"status": "online", "message": "Pricer API Active"}


@app.post("/lines/total", response_model=LineResponse)
async def line_total(req: LineRequest):
    try:
        item = req.item.to_record()
        return LineResponse(
            item_id=item.id,
            base_total=base_total(item),
            multiplier_adjustment=multiplier_adjustment(item),
            line_total=compute_line_total(item),
            discountable_amount=compute_line_discountable_amount(item),
            discount=compute_line_discount(item, req.global_discount_rate),
            adjustments=[AdjustmentOut(**asdict(a)) for a in multiplier_adjustments(item)],
        )
    except Exception as e:
        logger.exception("Line calculation failed")
        raise HTTPException(status_code=500, detail=str(e))


@app.post("/quotes/totals", response_model=TotalsResponse)
async def quote_totals(req: QuoteIn):
    try:
        quote = req.to_record()
        totals = compute_quote_totals(quote)
        return TotalsResponse(
            quote_id=quote.id,
            summary=[list(row) for row in summary_rows(quote)],
            **totals.to_dict(),
        )
    except Exception as e:
        logger.exception("Quote calculation failed")
        raise HTTPException(status_code=500, detail=str(e))
