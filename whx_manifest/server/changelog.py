from __future__ import annotations

from dataclasses import dataclass

"""Release notes shown on the index page (newest first)."""

__all__ = [
    "ChangelogEntry",
    "CHANGELOG",
]


@dataclass(frozen=True)
class ChangelogEntry:
    version: str
    date: str
    items: tuple[str, ...]


CHANGELOG: list[ChangelogEntry] = [
    ChangelogEntry(
        version="0.4.0",
        date="2024-11",
        items=(
            "更新 SKU 映射至 2024-11-27 版",
            "命令行与网页版本号同步到 0.4.0",
        ),
    ),
    ChangelogEntry(
        version="0.3.0",
        date="2024-06",
        items=(
            "预览弹窗展示全量数据，预览与下载分离",
            "上传提示与下载按钮样式强化，指引更明显",
            "默认端口改为 8001，版本同步到 0.3.0",
        ),
    ),
    ChangelogEntry(
        version="0.2.0",
        date="2024-05",
        items=(
            "新增网页端上传与下载，直接转换出仓库文件",
            "现在根据列名从输入的Excel查找数据",
            "省缺的记录添加国家字段",
            "页面展示当前版本与更新记录，方便查看",
        ),
    ),
    ChangelogEntry(
        version="0.1.0",
        date="2024-04",
        items=("命令行工具初始发布，支持 SKU 映射转换",),
    ),
]
