from pydantic import BaseModel
from typing import Optional

class CleanedProduct(BaseModel):
    product_id: str
    product_name: Optional[str] = None
    category1: Optional[str] = None
    category2: Optional[str] = None
    category3: Optional[str] = None
    category4: Optional[str] = None
    category5: Optional[str] = None
    discounted_price: Optional[float] = None  # from "₹1,099"
    actual_price: Optional[float] = None
    discount_percentage: Optional[float] = None  # from "64%"
    rating: Optional[float] = None
    rating_count: int  # rows without one never reach the dimension
    about_product: Optional[str] = None

class ReviewFact(BaseModel):
    review_id: str
    review_title: Optional[str] = None
    product_id: Optional[str] = None  # -> dim_product.product_id
    user_id: Optional[str] = None
    user_name: Optional[str] = None  # title-cased

class ProductReviewCount(BaseModel):
    product_id: str
    product_name: Optional[str]
    review_count: int

class ReviewerCount(BaseModel):
    user_id: Optional[str]
    user_name: Optional[str]
    review_count: int
