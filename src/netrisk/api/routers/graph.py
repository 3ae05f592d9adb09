"""Graph analysis endpoints: paths, influence, propagation, neighbourhoods, stats."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query

from netrisk import defaults
from netrisk.analysis import RelationshipAnalyzer
from netrisk.api.deps import get_analyzer

router = APIRouter(tags=["graph"])


@router.get("/graph/path")
async def graph_path(
    start: str = Query(..., min_length=1),
    end: str = Query(..., min_length=1),
    max_depth: float = Query(defaults.DEFAULT_PATH_MAX_DEPTH, gt=0),
    analyzer: RelationshipAnalyzer = Depends(get_analyzer),
):
    result = await analyzer.find_shortest_path(start, end, max_depth)
    if result is None:
        raise HTTPException(status_code=404, detail=f"No path between {start} and {end}")
    return result.to_dict()


@router.get("/graph/influence")
async def graph_influence(
    node_ids: list[str] | None = Query(None),
    limit: int = Query(defaults.QUERY_LIMIT_SMALL, ge=1),
    analyzer: RelationshipAnalyzer = Depends(get_analyzer),
):
    scores = await analyzer.calculate_influence_scores(node_ids)
    return [s.to_dict() for s in scores[:limit]]


@router.get("/graph/propagation/{node_id}")
async def graph_propagation(
    node_id: str,
    initial_risk: float = Query(defaults.DEFAULT_INITIAL_RISK, gt=0),
    max_depth: int = Query(defaults.DEFAULT_PROPAGATION_MAX_DEPTH, ge=1),
    analyzer: RelationshipAnalyzer = Depends(get_analyzer),
):
    result = await analyzer.analyze_risk_propagation(node_id, initial_risk, max_depth)
    return result.to_dict()


@router.get("/graph/enterprise/{enterprise_id}")
async def graph_neighbourhood(
    enterprise_id: str,
    depth: int = Query(
        defaults.DEFAULT_NEIGHBOURHOOD_DEPTH, ge=1, le=defaults.MAX_NEIGHBOURHOOD_DEPTH,
    ),
    analyzer: RelationshipAnalyzer = Depends(get_analyzer),
):
    data = await analyzer.neighbourhood(enterprise_id, depth)
    return {"center": enterprise_id, "depth": depth, **data.to_dict()}


@router.get("/graph/nodes/{node_id}/edges")
async def graph_node_edges(
    node_id: str,
    analyzer: RelationshipAnalyzer = Depends(get_analyzer),
):
    return [e.to_dict() for e in await analyzer.node_edges(node_id)]


@router.get("/graph/stats")
async def graph_stats(analyzer: RelationshipAnalyzer = Depends(get_analyzer)):
    return await analyzer.graph_stats()
