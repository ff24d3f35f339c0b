"""
协作方默认实现 - 分公司抬头解析 / 集装箱元数据关联

分公司信息由调用方显式传入（不读取任何全局存储），这里只负责补全默认值；
集装箱元数据按箱号关联，匹配不到时字段留空，不报错。
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from ..interfaces import IBranchResolver, IContainerJoiner
from ..models import BranchInfo, CargoDetail, ContainerDetail

logger = logging.getLogger(__name__)


class BranchResolver(IBranchResolver):
    """分公司抬头解析器"""

    def __init__(self, default_name: str = "CHENNAI"):
        self.default_name = default_name

    def resolve(self, branch: BranchInfo | None) -> BranchInfo:
        if branch is None:
            logger.info(f"未提供分公司信息，使用默认抬头: {self.default_name}")
            return BranchInfo(
                branch_title=self.default_name,
                address="",
                tel="",
                email="",
                pan="",
                gstn="",
            )

        name = (branch.branch_title or branch.branch_name or "").strip() or self.default_name
        if branch.logo is None and branch.logo_url:
            logger.warning(f"分公司logo未预先加载，跳过: {branch.logo_url}")

        return BranchInfo(
            branch_title=name,
            branch_name=branch.branch_name or "",
            address=branch.address or "",
            tel=branch.tel or "",
            email=branch.email or "",
            pan=branch.pan or "",
            gstn=branch.gstn or "",
            logo_url=branch.logo_url,
            logo=branch.logo or None,
        )


class ContainerMetadataJoiner(IContainerJoiner):
    """按箱号补全封号/箱型"""

    def join(
        self,
        cargo: Sequence[CargoDetail],
        containers: Sequence[ContainerDetail],
    ) -> list[CargoDetail]:
        index: dict[str, ContainerDetail] = {}
        for container in containers:
            key = (container.container_no or "").strip()
            if key and key not in index:
                index[key] = container

        joined = []
        for row in cargo:
            key = (row.container_no or "").strip()
            match = index.get(key) if key else None
            if key and match is None:
                logger.debug(f"集装箱元数据未匹配: {key}")

            seal_no = row.actual_seal_no or (match.actual_seal_no if match else None) or ""
            type_name = row.container_type_name or ""
            if not type_name and match and match.container_type_details:
                type_name = match.container_type_details.container_type_name or ""

            joined.append(
                row.model_copy(
                    update={"actual_seal_no": seal_no, "container_type_name": type_name}
                )
            )
        return joined
