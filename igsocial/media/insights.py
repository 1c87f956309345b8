from igsocial.shared.graph_client import GraphClient, call_graph
from igsocial.shared.logging_utils import info as log_info, warning as log_warning
from igsocial.specs.common.enums import ResultStatus
from igsocial.specs.common.errors import TransportError
from igsocial.specs.models.instagram import (
    MEDIA_INSIGHT_METRICS,
    AccountInsightsRequest,
    GetMediaInsightsRequest,
)
from igsocial.specs.models.tools import PublishResult


class InsightsQuery:
    def __init__(self, client: GraphClient, ig_user_id: str) -> None:
        self.client = client
        self.ig_user_id = ig_user_id

    async def media_insights(self, req: GetMediaInsightsRequest) -> PublishResult:
        # Fixed metric set; video media may reject some of these
        resp = await call_graph(
            self.client,
            "GET",
            f"{req.media_id}/insights",
            {"metric": ",".join(MEDIA_INSIGHT_METRICS)},
        )
        return PublishResult(status=ResultStatus.OK.value, mediaId=req.media_id, result=resp)

    async def account_insights(self, req: AccountInsightsRequest) -> PublishResult:
        """Account-level insights.

        A blank metric raises InvalidParameterError before any call is made.
        Transport failures are reported as a status="error" result instead of
        raising; this is the only operation that does so.
        """
        params = req.to_params()
        try:
            resp = await call_graph(self.client, "GET", f"{self.ig_user_id}/insights", params)
        except TransportError as exc:
            log_warning(req.runTraceId, "instagram:insights:account_failed", metric=req.metric, error=str(exc))
            return PublishResult(status=ResultStatus.ERROR.value, error=str(exc))
        log_info(req.runTraceId, "instagram:insights:account_fetched", metric=req.metric, period=req.period)
        return PublishResult(status=ResultStatus.OK.value, result=resp)
