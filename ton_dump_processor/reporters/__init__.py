"""Report emitter implementations and the reporter base class."""

from ton_dump_processor.reporters.address_frequency import AddressFrequencyReporter
from ton_dump_processor.reporters.base import Reporter
from ton_dump_processor.reporters.jetton_detail import JettonDetailReporter
from ton_dump_processor.reporters.native_flow import NativeFlowReporter
from ton_dump_processor.reporters.tax_summary import TaxSummaryReporter
from ton_dump_processor.reporters.wallet import WalletExportReporter

__all__ = [
    "AddressFrequencyReporter",
    "JettonDetailReporter",
    "NativeFlowReporter",
    "Reporter",
    "TaxSummaryReporter",
    "WalletExportReporter",
]
