from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator, model_validator

from venue_nav.domain.entities.geography import Point
from venue_nav.domain.entities.venue import Obstacle, Target, Venue

StrategyKind = Literal["direct", "corner", "refine", "wrap"]


class LogModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    debug: bool = False


class GeometryModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    safe_margin: float = 1.0
    access_clearance: float = 1.0  # beyond the margin
    shelf_spacing: float = 4.0

    @field_validator("safe_margin", "shelf_spacing")
    @classmethod
    def _nonneg(cls, v: float, info: ValidationInfo) -> float:
        if v < 0:
            raise ValueError(f"{info.field_name} must be >= 0")
        return v

    @field_validator("access_clearance")
    @classmethod
    def _positive(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("access_clearance must be > 0")
        return v


class GridModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    perimeter_spacing: float = 15.0
    corner_spacing: float = 5.0
    corner_zone: float = 20.0
    perimeter_offset: float = 1.0
    corner_offset: float = 10.0
    shortcut_distance: float = 60.0
    alignment_tolerance: float = 20.0
    edge_alignment_tolerance: float = 5.0
    corridor_offset: float = 10.0
    approach_offset: float = 10.0
    boundary_samples: int = 5

    @field_validator("perimeter_spacing", "corner_spacing")
    @classmethod
    def _positive(cls, v: float, info: ValidationInfo) -> float:
        if v <= 0:
            raise ValueError(f"{info.field_name} must be > 0")
        return v

    @field_validator(
        "corner_zone",
        "perimeter_offset",
        "corner_offset",
        "shortcut_distance",
        "alignment_tolerance",
        "edge_alignment_tolerance",
        "corridor_offset",
        "approach_offset",
        "boundary_samples",
    )
    @classmethod
    def _nonneg(cls, v, info: ValidationInfo):
        if v < 0:
            raise ValueError(f"{info.field_name} must be >= 0")
        return v


class SearchModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    strategies: list[StrategyKind] = Field(
        default_factory=lambda: ["direct", "corner", "refine", "wrap"]
    )
    refine_resolutions: list[float] = Field(default_factory=lambda: [100.0, 50.0, 25.0, 10.0])
    wrap_margin: float = 5.0
    wrap_relevance_margin: float = 50.0
    graph_search: bool = True  # A* when every strategy comes up empty

    @field_validator("strategies")
    @classmethod
    def _unique(cls, v: list[str]) -> list[str]:
        dupes = sorted({k for k in v if v.count(k) > 1})
        if dupes:
            raise ValueError(f"duplicate strategies: {dupes}")
        return v

    @field_validator("refine_resolutions")
    @classmethod
    def _resolutions(cls, v: list[float]) -> list[float]:
        if any(r <= 0 for r in v):
            raise ValueError("refine_resolutions must all be > 0")
        return v


class PlannerModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    name: str = "venue"
    run_id: str = "local"
    log: LogModel = Field(default_factory=LogModel)
    geometry: GeometryModel = Field(default_factory=GeometryModel)
    grid: GridModel = Field(default_factory=GridModel)
    search: SearchModel = Field(default_factory=SearchModel)


# ----------------- VENUE INPUT ---------------------


class PointModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    x: float
    y: float

    @model_validator(mode="before")
    @classmethod
    def _from_pair(cls, v):
        # allow [x, y] as shorthand
        if isinstance(v, (list, tuple)) and len(v) == 2:
            return {"x": v[0], "y": v[1]}
        return v

    def to_domain(self) -> Point:
        return Point(self.x, self.y)


class TargetModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    id: str
    weight: float = Field(default=1.0, ge=0)


class ObstacleModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    id: str
    position: PointModel
    width: float = Field(ge=0)
    length: float = Field(ge=0)
    side_a: list[TargetModel] = Field(default_factory=list)
    side_b: list[TargetModel] = Field(default_factory=list)

    def to_domain(self) -> Obstacle:
        return Obstacle(
            id=self.id,
            position=self.position.to_domain(),
            width=self.width,
            length=self.length,
            side_a=tuple(Target(t.id, t.weight) for t in self.side_a),
            side_b=tuple(Target(t.id, t.weight) for t in self.side_b),
        )


class VenueModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    boundary: list[PointModel] = Field(default_factory=list)
    obstacles: list[ObstacleModel] = Field(default_factory=list)

    @model_validator(mode="after")
    def _unique_targets(self):
        seen: set[str] = set()
        for o in self.obstacles:
            for t in o.side_a + o.side_b:
                if t.id in seen:
                    raise ValueError(f"target id {t.id!r} appears more than once")
                seen.add(t.id)
        return self

    def to_domain(self) -> Venue:
        return Venue(
            boundary=tuple(p.to_domain() for p in self.boundary),
            obstacles=tuple(o.to_domain() for o in self.obstacles),
        )
