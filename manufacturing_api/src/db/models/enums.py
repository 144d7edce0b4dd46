from __future__ import annotations

import enum


class LookupIntEnum(enum.IntEnum):
    """IntEnum that can also be looked up by member name (case-insensitive)."""

    @classmethod
    def parse(cls, value):
        """Resolve an enum member from a member, an integer, a digit string or a name."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            text = value.strip()
            if text.lstrip("-").isdigit():
                return cls(int(text))
            for member in cls:
                if member.name.lower() == text.lower():
                    return member
            raise ValueError(f"{value!r} is not a valid {cls.__name__}")
        if isinstance(value, int):
            return cls(value)
        raise ValueError(f"{value!r} is not a valid {cls.__name__}")


class FacilityType(LookupIntEnum):
    InvestmentCasting = 1
    AirfoilCasting = 2
    Forging = 3
    Machining = 4
    Assembly = 5
    QualityControl = 6
    Warehouse = 7


class ProductionStatus(LookupIntEnum):
    Planned = 1
    Released = 2
    InProgress = 3
    OnHold = 4
    Completed = 5
    Cancelled = 6
    Shipped = 7


class Priority(LookupIntEnum):
    Low = 1
    Medium = 2
    High = 3
    Critical = 4


class MaterialType(LookupIntEnum):
    InconelAlloy = 1
    TitaniumAlloy = 2
    NickelAlloy = 3
    SteelAlloy = 4
    AluminumAlloy = 5
    SuperAlloy = 6
    CarbonSteel = 7
    StainlessSteel = 8


class InspectionType(LookupIntEnum):
    Incoming = 1
    InProcess = 2
    Final = 3
    Dimensional = 4
    Visual = 5
    Metallurgical = 6
    NonDestructiveTest = 7
    PressureTest = 8
    FlowTest = 9
    Radiographic = 10
    DyePenetrant = 11
    MagneticParticle = 12


class InspectionStatus(LookupIntEnum):
    Pending = 1
    InProgress = 2
    Completed = 3
    OnHold = 4
    Failed = 5
    Rework = 6
    Approved = 7


class DocumentType(LookupIntEnum):
    InspectionReport = 1
    CertificationDocument = 2
    TestResults = 3
    MaterialCertificate = 4
    DrawingRevision = 5
    NonConformanceReport = 6
    CorrectiveActionReport = 7
    ProcessSheet = 8
    QualityManual = 9
    CalibrationCertificate = 10
    TechnicalSpecification = 11
    ComplianceDocument = 12


class EquipmentType(LookupIntEnum):
    CastingFurnace = 1
    WaxInjectionMachine = 2
    DippingRobot = 3
    AutoClave = 4
    VacuumFurnace = 5
    CNCMachine = 6
    Grinder = 7
    MillingMachine = 8
    Lathe = 9
    PressureTester = 10
    FlowTester = 11
    XRayMachine = 12
    CoordinateMeasuringMachine = 13
    SurfaceGrinder = 14
    HeatTreatmentFurnace = 15
    QualityScanner = 16


class EquipmentStatus(LookupIntEnum):
    Available = 1
    InUse = 2
    Maintenance = 3
    Breakdown = 4
    Scheduled = 5
    Retired = 6


class MetricType(LookupIntEnum):
    CycleTime = 1
    ThroughputRate = 2
    QualityRate = 3
    ScrapRate = 4
    ReworkRate = 5
    EquipmentEfficiency = 6
    MaterialUtilization = 7
    LaborEfficiency = 8
    EnergyConsumption = 9
    DefectRate = 10
    OnTimeDelivery = 11
    ProductionVolume = 12
    MachineDowntime = 13
    YieldRate = 14
    FirstPassYield = 15
