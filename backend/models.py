# In-memory data models for clients, IDN scan reports and the grouping catalog
from typing import Any, Dict, List, Optional, Tuple
from dataclasses import dataclass, field

# In-memory storage
clients: Dict[str, 'Client'] = {}
processed_client_data: Dict[str, Dict[str, Any]] = {}  # stored in JSON shape, keyed by clientId
inflammation_groupings: List['InflammationGrouping'] = []  # catalog order matters for matching
inflammations: List[str] = []

@dataclass
class Client:
    """Practitioner's client record (read-only to the IDN pipeline)"""
    clientId: str
    clientNumber: int
    fullName: str
    email: Optional[str] = None

@dataclass(frozen=True)
class Condition:
    """One finding detected in an IDN scan"""
    name: Optional[str] = None
    scale: Optional[int] = None
    percentage: Optional[str] = None  # e.g. "45%"
    realFreq: Tuple[str, ...] = ()
    brainFreq: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "scale": self.scale,
            "percentage": self.percentage,
            "realFreq": list(self.realFreq),
            "brainFreq": list(self.brainFreq),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Condition':
        """Build from stored JSON; keys missing from older uploads are tolerated"""
        return cls(
            name=data.get("name"),
            scale=data.get("scale"),
            percentage=data.get("percentage"),
            realFreq=tuple(data.get("realFreq") or ()),
            brainFreq=tuple(data.get("brainFreq") or ()),
        )

@dataclass
class ScanReport:
    """Parsed result of one uploaded IDN text document"""
    scanType: int = 0
    report: List[Condition] = field(default_factory=list)

    def condition_names(self) -> List[Optional[str]]:
        return [condition.name for condition in self.report]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "scanType": self.scanType,
            "report": [condition.to_dict() for condition in self.report],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ScanReport':
        return cls(
            scanType=data.get("scanType") or 0,
            report=[Condition.from_dict(c) for c in data.get("report") or []],
        )

@dataclass
class InflammationGrouping:
    """Catalog entry: a named set of inflammations that must all be present"""
    groupName: str
    inflammations: List[str] = field(default_factory=list)

@dataclass
class ScanTypeAggregate:
    scanType: int
    avgScale: float
    avgPercentage: float

@dataclass
class MatchedGroupings:
    """Every grouping matched across a client's scans, for report display"""
    groupNames: List[str] = field(default_factory=list)
    inflammations: List[str] = field(default_factory=list)

@dataclass
class ProcessedClientData:
    """A client's stored scan reports, at most one per scan type"""
    clientId: str
    idnData: List[ScanReport] = field(default_factory=list)
    idnReportDocumentName: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "clientId": self.clientId,
            "idnData": [scan.to_dict() for scan in self.idnData],
            "idnReportDocumentName": list(self.idnReportDocumentName),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ProcessedClientData':
        return cls(
            clientId=data["clientId"],
            idnData=[ScanReport.from_dict(s) for s in data.get("idnData") or []],
            idnReportDocumentName=list(data.get("idnReportDocumentName") or []),
        )
