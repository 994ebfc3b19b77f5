from pydantic import BaseModel, Field


class Book(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    author: str = Field(..., min_length=1, max_length=100)
    genre: str = Field(..., min_length=1, max_length=50)
    published_year: int = Field(..., ge=1000, le=2100)
    price: float = Field(..., ge=0)
    in_stock: bool = True
