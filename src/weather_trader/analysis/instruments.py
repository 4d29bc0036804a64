"""Regional market instruments used by the trade recommendation engine."""

from types import MappingProxyType
from typing import Mapping, NamedTuple, Optional, Tuple


class Instrument(NamedTuple):
    ticker: str
    name: str
    type: str
    exchange: Optional[str] = None


InstrumentTable = Mapping[str, Mapping[str, Tuple[Instrument, ...]]]


def _table(**sectors: Tuple[Instrument, ...]) -> Mapping[str, Tuple[Instrument, ...]]:
    return MappingProxyType(sectors)


MARKET_INSTRUMENTS: InstrumentTable = MappingProxyType({
    "US": _table(
        energy=(
            Instrument("XLE", "Energy Select Sector SPDR Fund", "ETF"),
            Instrument("VDE", "Vanguard Energy ETF", "ETF"),
        ),
        naturalGas=(
            Instrument("UNG", "United States Natural Gas Fund", "ETF"),
            Instrument("BOIL", "ProShares Ultra Bloomberg Natural Gas", "ETF"),
        ),
        utilities=(
            Instrument("XLU", "Utilities Select Sector SPDR Fund", "ETF"),
            Instrument("VPU", "Vanguard Utilities ETF", "ETF"),
        ),
        agriculture=(
            Instrument("DBA", "Invesco DB Agriculture Fund", "ETF"),
            Instrument("MOO", "VanEck Agribusiness ETF", "ETF"),
        ),
        corn=(Instrument("CORN", "Teucrium Corn Fund", "ETF"),),
        soybeans=(Instrument("SOYB", "Teucrium Soybean Fund", "ETF"),),
        wheat=(Instrument("WEAT", "Teucrium Wheat Fund", "ETF"),),
        broadMarket=(
            Instrument("SPY", "SPDR S&P 500 ETF", "ETF"),
            Instrument("VTI", "Vanguard Total Stock Market ETF", "ETF"),
        ),
        retail=(
            Instrument("XRT", "SPDR S&P Retail ETF", "ETF"),
            Instrument("RTH", "VanEck Retail ETF", "ETF"),
        ),
    ),
    "EU": _table(
        energy=(
            Instrument("IEUR.DE", "iShares STOXX Europe 600 Oil & Gas", "ETF", "Xetra"),
            Instrument("SX6P.DE", "STOXX Europe 600 Oil & Gas", "Index", "Eurex"),
        ),
        naturalGas=(
            Instrument("TTF", "Dutch TTF Natural Gas Futures", "Futures", "ICE"),
            Instrument("MNGA.L", "WisdomTree Natural Gas", "ETC", "LSE"),
        ),
        utilities=(
            Instrument("EXH5.DE", "iShares STOXX Europe 600 Utilities", "ETF", "Xetra"),
            Instrument("SX6E", "STOXX Europe 600 Utilities", "Index", "Eurex"),
        ),
        agriculture=(
            Instrument("APTS.L", "iShares Agribusiness UCITS ETF", "ETF", "LSE"),
            Instrument("FAGR.PA", "Lyxor MSCI World Agriculture", "ETF", "Euronext"),
        ),
        wheat=(
            Instrument("WEAT.L", "WisdomTree Wheat", "ETC", "LSE"),
            Instrument("EBM", "European Milling Wheat Futures", "Futures", "Euronext"),
        ),
        broadMarket=(
            Instrument("MEUD.L", "iShares Core MSCI Europe UCITS", "ETF", "LSE"),
            Instrument("VGK", "Vanguard FTSE Europe ETF", "ETF", "NYSE"),
        ),
    ),
    "UK": _table(
        energy=(
            Instrument("ISF.L", "iShares Core FTSE 100 (Energy exposure)", "ETF", "LSE"),
            Instrument("BP.L", "BP plc", "Stock", "LSE"),
        ),
        naturalGas=(
            Instrument("NGAS.L", "WisdomTree Natural Gas", "ETC", "LSE"),
            Instrument("NBP", "UK NBP Natural Gas Futures", "Futures", "ICE"),
        ),
        utilities=(
            Instrument("UKX", "FTSE 100 Utilities Sector", "Index", "LSE"),
            Instrument("NG.L", "National Grid plc", "Stock", "LSE"),
        ),
        broadMarket=(
            Instrument("ISF.L", "iShares Core FTSE 100", "ETF", "LSE"),
            Instrument("VUKE.L", "Vanguard FTSE 100 UCITS ETF", "ETF", "LSE"),
        ),
    ),
    "Japan": _table(
        energy=(
            Instrument("1605.T", "INPEX Corporation", "Stock", "TSE"),
            Instrument("1662.T", "JGC Holdings", "Stock", "TSE"),
        ),
        utilities=(
            Instrument("9501.T", "Tokyo Electric Power", "Stock", "TSE"),
            Instrument("9502.T", "Chubu Electric Power", "Stock", "TSE"),
        ),
        broadMarket=(
            Instrument("EWJ", "iShares MSCI Japan ETF", "ETF", "NYSE"),
            Instrument("1306.T", "TOPIX ETF", "ETF", "TSE"),
        ),
    ),
    "Australia": _table(
        energy=(
            Instrument("XEJ.AX", "S&P/ASX 200 Energy", "ETF", "ASX"),
            Instrument("WDS.AX", "Woodside Energy", "Stock", "ASX"),
        ),
        utilities=(
            Instrument("XUJ.AX", "S&P/ASX 200 Utilities", "ETF", "ASX"),
            Instrument("AGL.AX", "AGL Energy", "Stock", "ASX"),
        ),
        wheat=(
            Instrument("WM", "ASX Wheat Futures", "Futures", "ASX"),
            Instrument("GNC.AX", "GrainCorp Limited", "Stock", "ASX"),
        ),
        broadMarket=(
            Instrument("STW.AX", "SPDR S&P/ASX 200", "ETF", "ASX"),
            Instrument("VAS.AX", "Vanguard Australian Shares", "ETF", "ASX"),
        ),
    ),
    "Brazil": _table(
        coffee=(
            Instrument("KC", "Coffee C Futures", "Futures", "ICE"),
            Instrument("JO", "iPath Bloomberg Coffee ETN", "ETN", "NYSE"),
        ),
        soybeans=(
            Instrument("SOJA3.SA", "Boa Safra Sementes", "Stock", "B3"),
            Instrument("SOYB", "Teucrium Soybean Fund", "ETF", "NYSE"),
        ),
        sugar=(
            Instrument("SB", "Sugar #11 Futures", "Futures", "ICE"),
            Instrument("CANE", "Teucrium Sugar Fund", "ETF", "NYSE"),
        ),
        broadMarket=(
            Instrument("EWZ", "iShares MSCI Brazil ETF", "ETF", "NYSE"),
            Instrument("BOVA11.SA", "iShares Ibovespa", "ETF", "B3"),
        ),
    ),
    "China": _table(
        broadMarket=(
            Instrument("FXI", "iShares China Large-Cap ETF", "ETF", "NYSE"),
            Instrument("MCHI", "iShares MSCI China ETF", "ETF", "NASDAQ"),
        ),
        agriculture=(
            Instrument("CHAU", "Direxion Daily CSI China Internet Bull", "ETF", "NYSE"),
        ),
    ),
    "India": _table(
        broadMarket=(
            Instrument("INDA", "iShares MSCI India ETF", "ETF", "NASDAQ"),
            Instrument("PIN", "Invesco India ETF", "ETF", "NYSE"),
        ),
        utilities=(
            Instrument("NTPC.NS", "NTPC Limited", "Stock", "NSE"),
            Instrument("POWERGRID.NS", "Power Grid Corporation", "Stock", "NSE"),
        ),
    ),
    "Canada": _table(
        energy=(
            Instrument("XEG.TO", "iShares S&P/TSX Capped Energy", "ETF", "TSX"),
            Instrument("ENB.TO", "Enbridge Inc", "Stock", "TSX"),
        ),
        naturalGas=(
            Instrument("HNU.TO", "BetaPro Natural Gas Bull", "ETF", "TSX"),
            Instrument("TRP.TO", "TC Energy Corporation", "Stock", "TSX"),
        ),
        utilities=(
            Instrument("XUT.TO", "iShares S&P/TSX Capped Utilities", "ETF", "TSX"),
            Instrument("FTS.TO", "Fortis Inc", "Stock", "TSX"),
        ),
        wheat=(
            Instrument("WCE", "Winnipeg Commodity Exchange Wheat", "Futures", "ICE"),
        ),
        broadMarket=(
            Instrument("XIU.TO", "iShares S&P/TSX 60 Index", "ETF", "TSX"),
            Instrument("XIC.TO", "iShares Core S&P/TSX", "ETF", "TSX"),
        ),
    ),
    "Global": _table(
        energy=(Instrument("IXC", "iShares Global Energy ETF", "ETF", "NYSE"),),
        utilities=(Instrument("JXI", "iShares Global Utilities ETF", "ETF", "NYSE"),),
        agriculture=(
            Instrument("DBA", "Invesco DB Agriculture Fund", "ETF", "NYSE"),
            Instrument("RJA", "Elements Rogers Agriculture ETN", "ETN", "NYSE"),
        ),
        broadMarket=(
            Instrument("VT", "Vanguard Total World Stock ETF", "ETF", "NYSE"),
            Instrument("ACWI", "iShares MSCI ACWI ETF", "ETF", "NASDAQ"),
        ),
    ),
})


def get_instrument(
    market: str,
    sector: str,
    table: InstrumentTable = MARKET_INSTRUMENTS,
) -> Optional[Instrument]:
    """First instrument for a market and sector, falling back to the Global table."""
    for key in (market, "Global"):
        instruments = table.get(key, {}).get(sector)
        if instruments:
            return instruments[0]
    return None
