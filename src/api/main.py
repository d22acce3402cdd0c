"""
FastAPI application for the smartphone recommendation service.
"""
from fastapi import FastAPI, HTTPException, Depends, Header
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field, field_validator
from typing import List, Optional, Dict
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root))

from src import config
from src.recommend.budget import resolve_budget_range
from src.recommend.ranker import PhoneRanker, MATCH_FEATURES
from src.scoring.score_updater import PhoneScoreUpdater
from src.store.phone_store import PhoneStore, InsightStore, ReviewStore
from src.store.records import PhoneNotFoundError
from src.data_pipeline.csv_importer import CSVImporter
from src.data_pipeline.phone_analysis import PhoneAnalysisService
from src.data_pipeline.review_jobs import ReviewJobs
from src.data_pipeline.youtube_client import YouTubeClient

# Initialize FastAPI app
app = FastAPI(
    title="PhonePick Advisor API",
    description="Smartphone recommendations from spec analysis and review sentiment",
    version="1.0.0"
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Configure this properly in production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Shared components (lazy loading)
phone_store = None
insight_store = None
review_store = None
youtube_client = None

PRIORITY_NAMES = set(MATCH_FEATURES) | {'software', 'design'}


def verify_api_key(authorization: Optional[str] = Header(None)):
    """Verify API key in Authorization header."""
    if not config.API_KEY:
        return True
    if not authorization:
        raise HTTPException(status_code=401, detail="Missing Authorization header")
    if not authorization.startswith("Bearer "):
        raise HTTPException(status_code=401, detail="Invalid Authorization format. Use: Bearer <API_KEY>")
    provided_key = authorization.replace("Bearer ", "").strip()
    if provided_key != config.API_KEY:
        raise HTTPException(status_code=401, detail="Invalid API key")
    return True


def get_phone_store():
    """Get or initialize phone store."""
    global phone_store
    if phone_store is None:
        phone_store = PhoneStore()
    return phone_store


def get_insight_store():
    global insight_store
    if insight_store is None:
        insight_store = InsightStore()
    return insight_store


def get_review_store():
    global review_store
    if review_store is None:
        review_store = ReviewStore()
    return review_store


def get_youtube_client():
    global youtube_client
    if youtube_client is None:
        youtube_client = YouTubeClient()
    return youtube_client


def get_ranker(phones=Depends(get_phone_store), insights=Depends(get_insight_store)):
    return PhoneRanker(phones, insights)


def get_score_updater(phones=Depends(get_phone_store)):
    return PhoneScoreUpdater(phones)


def get_analysis_service(
    phones=Depends(get_phone_store),
    reviews=Depends(get_review_store),
    youtube=Depends(get_youtube_client)
):
    return PhoneAnalysisService(phones, youtube, review_store=reviews)


def get_review_jobs(
    phones=Depends(get_phone_store),
    reviews=Depends(get_review_store),
    youtube=Depends(get_youtube_client)
):
    return ReviewJobs(phones, reviews, youtube_client=youtube)


# Request/Response Models
class RecommendationRequest(BaseModel):
    """User's budget bucket and feature priorities."""
    product_type: str = Field(default="smartphone", alias="productType", description="Product category")
    budget: str = Field(..., description="Budget bucket label (e.g. '20-25', '75-plus', 'New Gen')")
    priorities: Dict[str, int] = Field(default={}, description="Feature -> weight (0-100)")

    class Config:
        populate_by_name = True
        json_schema_extra = {
            "example": {
                "productType": "smartphone",
                "budget": "20-25",
                "priorities": {"camera": 90, "battery": 70, "performance": 60, "privacy": 30, "looks": 20}
            }
        }

    @field_validator('priorities')
    @classmethod
    def check_priorities(cls, priorities: Dict[str, int]) -> Dict[str, int]:
        for name, weight in priorities.items():
            if name not in PRIORITY_NAMES:
                raise ValueError(f"Unknown priority: {name}")
            if not 0 <= weight <= 100:
                raise ValueError(f"Priority weight for {name} must be between 0 and 100")
        return priorities


class AlternativeComparisonModel(BaseModel):
    brand: str
    model: str
    reason: str


class PhoneRecommendationModel(BaseModel):
    """Single phone recommendation."""
    id: int
    brand: str
    model: str
    price: int
    match_score: int
    youtube_sentiment_score: Optional[int] = None
    reddit_sentiment_score: Optional[int] = None
    specs: Dict[str, str]
    scores: Dict[str, Optional[int]]
    affiliate_links: Dict[str, str]
    image: str
    why_picked: Optional[str] = None
    why_love_it: Optional[str] = None
    what_to_know: Optional[str] = None
    beats_alternatives: List[AlternativeComparisonModel] = []


class RecommendationResponse(BaseModel):
    """Response containing ranked phone recommendations."""
    recommendations: List[PhoneRecommendationModel]
    budget: str
    total_results: int


class PhoneModel(BaseModel):
    id: int
    brand: str
    model: str
    price: int
    memory_and_storage: Optional[str] = None
    display_info: Optional[str] = None
    camera_info: Optional[str] = None
    processor: Optional[str] = None
    battery: Optional[str] = None
    image_url: Optional[str] = None
    camera_score: Optional[int] = None
    battery_score: Optional[int] = None
    software_score: Optional[int] = None
    privacy_score: Optional[int] = None
    looks_score: Optional[int] = None
    affiliate_amazon: Optional[str] = None
    affiliate_flipkart: Optional[str] = None
    youtube_sentiment_score: Optional[int] = None
    reddit_sentiment_score: Optional[int] = None


class PhoneCountResponse(BaseModel):
    budget: str
    min_price: int
    max_price: int
    count: int


class PhoneAnalysisResponse(BaseModel):
    phone_id: int
    phone_model: str
    average_sentiment_score: int
    channel_scores: Dict[str, int]
    channel_feature_scores: Dict[str, Dict[str, int]]
    average_feature_scores: Dict[str, int]
    message: str
    has_consensus: bool


class UpdateScoresResponse(BaseModel):
    updated: int
    failed: int
    total: int


class ImportResponse(BaseModel):
    total_lines: int
    imported: int
    skipped: int
    errors: int
    skip_reasons: Dict[str, int]


class BatchProcessResponse(BaseModel):
    message: str
    transcripts_fetched: int = 0
    reviews_analyzed: int = 0
    phones_updated: int = 0


class RedditSentimentResponse(BaseModel):
    phone_id: int
    phone_model: str
    reddit_sentiment_score: Optional[int] = None
    total_posts: int
    analyzed_posts: int


# API Endpoints
@app.get("/")
async def root():
    """Service info."""
    return {
        "service": "PhonePick Advisor API",
        "status": "healthy",
        "version": "1.0.0"
    }


@app.get("/health")
def health_check(phones=Depends(get_phone_store)):
    """Health check with a store round trip."""
    try:
        count = len(phones.all())
        return {
            "status": "healthy",
            "store": "ready",
            "phones": count
        }
    except Exception as e:
        raise HTTPException(status_code=503, detail=f"Service unhealthy: {str(e)}")


@app.post("/recommend", response_model=RecommendationResponse)
def get_recommendations(
    request: RecommendationRequest,
    authenticated: bool = Depends(verify_api_key),
    ranker: PhoneRanker = Depends(get_ranker)
):
    """
    Get phone recommendations for a budget bucket and feature priorities.

    Requires API key authentication if API_KEY is set in environment.

    Returns:
        RecommendationResponse with up to 5 ranked phones (empty when none fit the budget)
    """
    try:
        recommendations = ranker.get_recommendations(request.budget, request.priorities)
        return RecommendationResponse(
            recommendations=[PhoneRecommendationModel(**rec.to_dict()) for rec in recommendations],
            budget=request.budget,
            total_results=len(recommendations)
        )
    except Exception as e:
        raise HTTPException(
            status_code=500,
            detail=f"Error generating recommendations: {str(e)}"
        )


@app.get("/phones", response_model=List[PhoneModel])
def list_phones(
    authenticated: bool = Depends(verify_api_key),
    phones=Depends(get_phone_store)
):
    try:
        return [PhoneModel(**phone.to_dict()) for phone in phones.all()]
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Error listing phones: {str(e)}")


@app.get("/phones/count", response_model=PhoneCountResponse)
def count_phones(
    budget: str,
    authenticated: bool = Depends(verify_api_key),
    phones=Depends(get_phone_store)
):
    """Number of phones in a budget bucket."""
    price_range = resolve_budget_range(budget)
    try:
        count = phones.count_by_price_range(price_range.min, price_range.max)
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Error counting phones: {str(e)}")
    return PhoneCountResponse(
        budget=budget,
        min_price=price_range.min,
        max_price=price_range.max,
        count=count
    )


@app.post("/analysis/phone/{phone_id}", response_model=PhoneAnalysisResponse)
def analyze_phone(
    phone_id: int,
    authenticated: bool = Depends(verify_api_key),
    service: PhoneAnalysisService = Depends(get_analysis_service)
):
    """Run feature-based YouTube review analysis for one phone."""
    try:
        return PhoneAnalysisResponse(**service.analyze_phone(phone_id).to_dict())
    except PhoneNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Analysis failed: {str(e)}")


@app.post("/analysis/update-scores", response_model=UpdateScoresResponse)
def update_scores(
    min_price: Optional[int] = None,
    max_price: Optional[int] = None,
    authenticated: bool = Depends(verify_api_key),
    updater: PhoneScoreUpdater = Depends(get_score_updater)
):
    """Rescore all phones, or only those in [min_price, max_price] when both are given."""
    try:
        if min_price is not None and max_price is not None:
            result = updater.update_phones_by_price_range(min_price, max_price)
        else:
            result = updater.update_all_phone_scores()
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Error updating scores: {str(e)}")
    return UpdateScoresResponse(updated=result.updated, failed=result.failed, total=result.total)


@app.post("/analysis/update-score/{phone_id}", response_model=PhoneModel)
def update_score(
    phone_id: int,
    authenticated: bool = Depends(verify_api_key),
    updater: PhoneScoreUpdater = Depends(get_score_updater)
):
    """Rescore one phone and return it."""
    try:
        return PhoneModel(**updater.update_phone_by_id(phone_id).to_dict())
    except PhoneNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Error updating score: {str(e)}")


@app.post("/admin/batch/import-csv", response_model=ImportResponse)
def import_csv(
    path: Optional[str] = None,
    authenticated: bool = Depends(verify_api_key),
    phones=Depends(get_phone_store)
):
    """Import phones from a CSV file on the server (defaults to PHONES_CSV)."""
    csv_path = Path(path or config.PHONES_CSV)
    try:
        stats = CSVImporter(phones).import_file(csv_path)
    except FileNotFoundError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Import failed: {str(e)}")
    return ImportResponse(**stats.to_dict())


@app.post("/admin/batch/process", response_model=BatchProcessResponse)
def process_batch(
    authenticated: bool = Depends(verify_api_key),
    jobs: ReviewJobs = Depends(get_review_jobs)
):
    """Run pending transcript, sentiment and aggregate jobs."""
    try:
        summary = jobs.process_all_pending()
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Batch processing failed: {str(e)}")

    if not summary.ran:
        return BatchProcessResponse(message=summary.message)

    return BatchProcessResponse(
        message=summary.message,
        transcripts_fetched=summary.transcripts.succeeded,
        reviews_analyzed=summary.youtube_sentiment.succeeded + summary.reddit_sentiment.succeeded,
        phones_updated=summary.youtube_aggregates.succeeded + summary.reddit_aggregates.succeeded
    )


@app.get("/reddit/phone/{phone_id}/sentiment", response_model=RedditSentimentResponse)
def reddit_sentiment(
    phone_id: int,
    authenticated: bool = Depends(verify_api_key),
    phones=Depends(get_phone_store),
    reviews=Depends(get_review_store)
):
    """Stored Reddit sentiment aggregate and post counts for a phone."""
    try:
        phone = phones.require(phone_id)
        posts = reviews.for_phone(phone_id, 'reddit')
    except PhoneNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Error fetching Reddit sentiment: {str(e)}")

    return RedditSentimentResponse(
        phone_id=phone_id,
        phone_model=phone.display_name,
        reddit_sentiment_score=phone.reddit_sentiment_score,
        total_posts=len(posts),
        analyzed_posts=sum(1 for post in posts if post.sentiment_score is not None)
    )


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "src.api.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True
    )
