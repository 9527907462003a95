from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any


@dataclass
class Record:
    """카탈로그 레코드 (하나의 논리적 저작)"""

    record_number: str  # 9자리 레코드 번호
    record_url: str = ""  # 카탈로그 표시 URL
    titles: list[str] = field(default_factory=list)
    isbns: list[str] = field(default_factory=list)
    issns: list[str] = field(default_factory=list)
    lccns: list[str] = field(default_factory=list)
    oclcs: list[str] = field(default_factory=list)
    marc_xml: str | None = None  # full 응답에만 존재

    @classmethod
    def from_json(cls, record_number: str, data: dict[str, Any]) -> "Record":
        return cls(
            record_number=record_number,
            record_url=data.get("recordURL", ""),
            titles=list(data.get("titles") or []),
            isbns=list(data.get("isbns") or []),
            issns=list(data.get("issns") or []),
            lccns=list(data.get("lccns") or []),
            oclcs=list(data.get("oclcs") or []),
            marc_xml=data.get("marc-xml"),
        )

    @property
    def title(self) -> str:
        """대표 제목 (첫 번째 제목)"""
        return self.titles[0] if self.titles else ""

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "recordURL": self.record_url,
            "titles": self.titles,
            "isbns": self.isbns,
            "issns": self.issns,
            "lccns": self.lccns,
            "oclcs": self.oclcs,
        }
        if self.marc_xml is not None:
            data["marc-xml"] = self.marc_xml
        return data


@dataclass
class Item:
    """디지털화된 아이템 (볼륨 하나)"""

    htid: str  # HathiTrust 볼륨 ID
    from_record: str = ""  # 소속 레코드 번호
    orig: str = ""  # 디지털화한 기관
    item_url: str = ""
    rights_code: str = ""
    last_update: str = ""  # YYYYMMDD
    enumcron: str = ""  # 권호/연대 표시 (예: "vol. 3, n. 2 1993")
    us_rights_string: str = ""  # "Full view" 또는 "Limited (search-only)"

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> "Item":
        return cls(
            htid=data.get("htid", ""),
            from_record=data.get("fromRecord", ""),
            orig=data.get("orig", ""),
            item_url=data.get("itemURL", ""),
            rights_code=data.get("rightsCode", ""),
            last_update=str(data.get("lastUpdate") or ""),
            # enumcron이 없으면 API는 false를 돌려줌
            enumcron=data.get("enumcron") or "",
            us_rights_string=data.get("usRightsString", ""),
        )

    @property
    def is_full_view(self) -> bool:
        """미국 내 전문 열람 가능 여부"""
        return self.us_rights_string.strip().lower() == "full view"

    @property
    def last_update_date(self) -> date | None:
        """lastUpdate를 date로 변환 (형식이 다르면 None)"""
        try:
            return datetime.strptime(self.last_update, "%Y%m%d").date()
        except ValueError:
            return None

    def to_dict(self) -> dict[str, Any]:
        return {
            "orig": self.orig,
            "fromRecord": self.from_record,
            "htid": self.htid,
            "itemURL": self.item_url,
            "rightsCode": self.rights_code,
            "lastUpdate": self.last_update,
            "enumcron": self.enumcron or False,
            "usRightsString": self.us_rights_string,
        }


@dataclass
class VolumeResult:
    """Bib API 응답 (레코드 + 아이템)"""

    records: dict[str, Record] = field(default_factory=dict)
    items: list[Item] = field(default_factory=list)

    @classmethod
    def from_json(cls, payload: dict[str, Any]) -> "VolumeResult":
        """
        파싱된 JSON 응답에서 생성

        스키마 검증은 하지 않음. 없는 필드는 빈 값으로 채움.
        """
        records = {
            number: Record.from_json(number, data)
            for number, data in (payload.get("records") or {}).items()
        }
        items = [Item.from_json(data) for data in payload.get("items") or []]
        return cls(records=records, items=items)

    def items_for(self, record_number: str) -> list[Item]:
        """레코드 번호에 속한 아이템 목록"""
        return [i for i in self.items if i.from_record == record_number]

    def full_view_items(self) -> list[Item]:
        return [i for i in self.items if i.is_full_view]

    def to_dict(self) -> dict:
        return {
            "records": {n: r.to_dict() for n, r in self.records.items()},
            "items": [i.to_dict() for i in self.items],
        }

    def to_rows(self) -> list[dict[str, Any]]:
        """아이템별 평면 행 목록 (CSV 저장용, 레코드 제목 포함)"""
        rows = []
        for item in self.items:
            record = self.records.get(item.from_record)
            rows.append(
                {
                    "record_number": item.from_record,
                    "title": record.title if record else "",
                    "htid": item.htid,
                    "enumcron": item.enumcron,
                    "orig": item.orig,
                    "rights_code": item.rights_code,
                    "us_rights": item.us_rights_string,
                    "last_update": item.last_update,
                    "item_url": item.item_url,
                }
            )
        return rows

    def summary(self) -> str:
        """결과 요약 문자열"""
        lines = [f"레코드: {len(self.records)}건 | 아이템: {len(self.items)}건", "-" * 60]
        for number, record in self.records.items():
            lines.append(f"[{number}] {record.title}")
            for item in self.items_for(number):
                enumcron = f" {item.enumcron}" if item.enumcron else ""
                lines.append(f"  {item.htid:28}{enumcron} | {item.us_rights_string}")
        return "\n".join(lines)
