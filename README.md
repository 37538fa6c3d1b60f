# dhcpsix

Parse and build the binary pieces of DHCPv6: DUIDs and the common options
found in DHCPv6 messages and relay messages. Addresses are `ipaddress`
objects, durations are `datetime.timedelta`.

## Installation

```
pip install dhcpsix
```

## Modules

- **`dhcpsix.duid`**: `DUIDLLT`, `DUIDLL`, `DUIDEN`, `DUIDUUID`, and
  `DUIDOpaque` for unknown types. Each has `to_bytes()`. `duid_from_bytes`
  reads any of them, type field included. `DUIDType` names the known types.
- **`dhcpsix.options`**: `OptionCode`, the abstract `Option`,
  `OptionGeneric` for codes with no dedicated type, and the `Options`
  container with `add`, `get`, `get_one`, `delete`, `update`, `to_bytes` and
  `from_bytes(data, parser=None)`. The module also has `OptionCodes` and
  `OptRequestedOption`, `OptStatusCode`, `OptClientID` and `OptServerID`,
  and `encode_duration` / `decode_duration` for 32-bit second counts.
  Truncated input raises `BufferTooShortError`. Bytes left over after parsing
  raise `UnreadBytesError`. Both are subclasses of `ValueError`.
- **`dhcpsix.basic`**: `OptInterfaceID`, `OptBootFileURL`, `OptBootFileParam`,
  `OptRelayPort`, `OptRemoteID`, `OptElapsedTime`,
  `OptInformationRefreshTime`, `OptDNS`, `OptDHCP4oDHCP6Server`,
  `OptClientLinkLayerAddress`, `OptNetworkInterfaceID` (with
  `NetworkInterfaceType`) and `OptClientArchType`.
- **`dhcpsix.ia`**: `OptIANA`, `OptIAPD`, `OptIAAddress` and `OptIAPrefix`,
  with their nested containers `IdentityOptions` (`addresses`,
  `one_address`, `status`), `PDOptions` (`prefixes`, `status`),
  `AddressOptions` and `PrefixOptions` (`status`). `parse_ia_option` parses
  one option body.
- **`dhcpsix.fourrd`**: `Opt4RD`, `Opt4RDMapRule`, `Opt4RDNonMapRule`, the
  `FourRDOptions` container (`map_rules`, `non_map_rule`) and
  `parse_fourrd_option`.
- **`dhcpsix.ntp`**: `OptNTPServer` (with `server_addresses()`), the
  `NTPSuboptionSrvAddr` and `NTPSuboptionMCAddr` suboptions,
  `NTPSuboptionCode` and `parse_ntp_suboption`.
- **`dhcpsix.iputils`**: `interface_addresses`, `get_matching_addr`,
  `get_link_local_addr`, `get_global_addr` and
  `get_mac_address_from_eui64`.

Every option class has `to_bytes()`, which gives the option body without the
code and length, and a `parse(data)` class method that reads a body.

## Parsing option lists

`Options.from_bytes` reads code/length/body records one after another. Which
option classes it produces depends on the parser:

- with no parser, only client ID, server ID, option request and status code
  options get their own classes;
- `IdentityOptions`, `PDOptions`, `AddressOptions` and `PrefixOptions` use
  `parse_ia_option`, which adds the IA option kinds;
- `FourRDOptions` uses `parse_fourrd_option`, which adds the 4RD kinds;
- `OptNTPServer.parse` uses `parse_ntp_suboption`.

Any other code becomes an `OptionGeneric` holding the raw body. The classes
in `dhcpsix.basic` are read with their own `parse` methods; no parser
function maps codes to them.

## Examples

```python
from dhcpsix.duid import DUIDLL, duid_from_bytes

duid = DUIDLL(hw_type=1, link_layer_addr=bytes.fromhex("020000000001"))
wire = duid.to_bytes()
assert duid_from_bytes(wire) == duid
```

```python
from dhcpsix.duid import DUIDLL
from dhcpsix.options import OptClientID, Options

opts = Options()
opts.add(OptClientID(DUIDLL(hw_type=1, link_layer_addr=bytes(6))))
data = opts.to_bytes()
assert Options.from_bytes(data).get_one(OptClientID.code) == opts.options[0]
```

```python
from dhcpsix.ia import IdentityOptions

addrs = IdentityOptions.from_bytes(body).addresses()
```

```python
from dhcpsix.iputils import get_link_local_addr, get_mac_address_from_eui64

addr = get_link_local_addr("eth0")
mac = get_mac_address_from_eui64(addr)
```

`get_link_local_addr` and `get_global_addr` read the interface's addresses
through `psutil` unless a `lookup` function is passed. They raise
`LookupError` when the interface or a matching address is missing.
`get_mac_address_from_eui64` raises `ValueError` when the address does not
embed an EUI-48.

## What it does not do

- It does not parse or build whole DHCPv6 messages or relay messages; it
  handles DUIDs and option bodies only.
- It has no client or server, and sends or receives no packets.
- It has no classes for the FQDN, domain search list, user class, relay
  message, DHCPv4 message or IA_TA options, nor for the NTP server-FQDN
  suboption; these are read as `OptionGeneric`.

## Running the tests

```
pip install -e ".[test]"
pytest
```