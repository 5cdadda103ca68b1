from fastapi import APIRouter, Depends
from typing import List, Optional
import logging
from freightdesk.api.deps import domain_errors, get_actor
from freightdesk.api.quotes import create_quote
from freightdesk.core.filters import equals_or_any, search_matches
from freightdesk.db.memory import STATE_LOCK, add_record, get_record, next_id, rows
from freightdesk.schemas.common import FreightService
from freightdesk.schemas.quote import ChargeRow, Quote, QuoteCreate
from freightdesk.schemas.rate import QuoteFromRate, RateCard, RateCardCreate, RateMetrics

router = APIRouter(tags=["rates"])
logger = logging.getLogger(__name__)


def matching_rates(
    q: Optional[str] = None,
    service: Optional[FreightService] = None,
    origin: Optional[str] = None,
    destination: Optional[str] = None,
) -> List[RateCard]:
    """Rate cards matching the filters, cheapest first."""
    origin = origin.strip().upper() if origin else None
    destination = destination.strip().upper() if destination else None
    found = [
        r for r in rows("rates")
        if search_matches(q, r.id, r.carrier, r.origin_code, r.destination_code)
        and equals_or_any(r.service, service)
        and equals_or_any(r.origin_code, origin)
        and equals_or_any(r.destination_code, destination)
    ]
    return sorted(found, key=lambda r: r.total_inr)


def rate_metrics(cards: List[RateCard]) -> RateMetrics:
    totals = sorted(r.total_inr for r in cards)
    if not totals:
        return RateMetrics(offers=0, best_inr=0, median_inr=0, avg_inr=0)
    return RateMetrics(
        offers=len(totals),
        best_inr=totals[0],
        # Upper median for even counts
        median_inr=totals[len(totals) // 2],
        avg_inr=round(sum(totals) / len(totals)),
    )


@router.get("/rates", response_model=List[RateCard])
async def list_rates(
    q: Optional[str] = None,
    service: Optional[FreightService] = None,
    origin: Optional[str] = None,
    destination: Optional[str] = None,
):
    return matching_rates(q, service, origin, destination)


@router.get("/rates/metrics", response_model=RateMetrics)
async def compare_rates(
    q: Optional[str] = None,
    service: Optional[FreightService] = None,
    origin: Optional[str] = None,
    destination: Optional[str] = None,
):
    return rate_metrics(matching_rates(q, service, origin, destination))


@router.post("/rates", response_model=RateCard, status_code=201)
async def add_rate(payload: RateCardCreate, actor: str = Depends(get_actor)):
    with STATE_LOCK:
        card = RateCard(id=next_id("rates", "OF", width=4), **payload.model_dump())
        add_record("rates", card)
    logger.info(f"Rate card {card.id} added by {actor}: {card.carrier} {card.origin_code} -> {card.destination_code} @ {card.total_inr} ({card.source.value})")
    return card


@router.get("/rates/{rate_id}", response_model=RateCard)
async def get_rate(rate_id: str):
    with domain_errors():
        return get_record("rates", rate_id, "Rate card")


@router.post("/rates/{rate_id}/quote", response_model=Quote, status_code=201)
async def quote_from_rate(rate_id: str, payload: QuoteFromRate, actor: str = Depends(get_actor)):
    """Draft a quote priced at the selected rate card, valid as long as the card is."""
    with domain_errors(), STATE_LOCK:
        card = get_record("rates", rate_id, "Rate card")
        quote = create_quote(
            QuoteCreate(
                customer=payload.customer.strip(),
                direction=payload.direction,
                origin_code=card.origin_code,
                origin_name=card.origin_name,
                destination_code=card.destination_code,
                destination_name=card.destination_name,
                service=card.service,
                container=payload.container,
                validity=card.validity,
                price_inr=card.total_inr,
                charges=[
                    ChargeRow(label="Base Freight", amount=card.base_inr),
                    ChargeRow(label="Surcharges", amount=card.surcharges_inr),
                ],
            ),
            source_rate_id=card.id,
        )
    logger.info(f"Quote {quote.id} drafted from rate card {card.id} ({card.carrier}) by {actor}")
    return quote
