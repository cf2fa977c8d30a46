# storefront/api/v1/routers/classify.py
from fastapi import APIRouter, Depends
import logging

from storefront.api.deps import product_repo
from storefront.api.v1.schemas.classify import AssistantIn, AssistantOut, ClassifyIn, ClassifyOut
from storefront.domain.services.assistant_svc import assistant_reply_svc
from storefront.domain.services.classifier_svc import classify_svc

logger = logging.getLogger(__name__)

router = APIRouter(tags=["classify"])


@router.post("/classify", response_model=ClassifyOut)
async def classify(body: ClassifyIn, products = Depends(product_repo)):
    """Score every catalog product against each requested category label."""
    logger.info("Request: classify categories=%s", body.categories)
    results = await classify_svc(products, body.categories, text=body.text)
    return {"results": results}


@router.post("/assistant", response_model=AssistantOut)
async def assistant(body: AssistantIn, products = Depends(product_repo)):
    return {"response": await assistant_reply_svc(products, body.message)}
