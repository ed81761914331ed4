from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, List
from gtraf_admin.core.enums import PortfolioCategory


class PortfolioCreate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    titre: str = Field(min_length=1)
    categorie: PortfolioCategory
    localisation: Optional[str] = None
    budget: Optional[str] = None
    annee: Optional[str] = None
    image_principale: str = Field(min_length=1)
    description: str = Field(min_length=1)
    technologies: Optional[str] = None
    stats_surface: Optional[str] = None
    stats_duree: Optional[str] = None
    stats_equipe: Optional[str] = None
    gallery_images: List[str] = Field(default_factory=list)


class PortfolioOut(BaseModel):
    id: str
    titre: str
    categorie: str
    localisation: Optional[str] = None
    budget: Optional[str] = None
    annee: Optional[str] = None
    image_principale: Optional[str] = None
    description: Optional[str] = None
    technologies: Optional[str] = None
    stats_surface: Optional[str] = None
    stats_duree: Optional[str] = None
    stats_equipe: Optional[str] = None
    gallery_images: List[str] = Field(default_factory=list)
    date_creation: Optional[str] = None
