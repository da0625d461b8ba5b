# regexdatagen

Generate data that matches a regular expression, either at random or in
sequence, and write it out as CSV, JSON, XML or TSV.

## Install

```
pip install .
```

There are no runtime dependencies. Tests need `pytest` (`pip install .[test]`).

## Command line

Generate ten items (the default) into a CSV file:

```
regex-data-gen generate --pattern "\d{3}-\d{2}-\d{4}" --output data.csv
```

Options of `generate`:

- `-p`, `--pattern`: the regex to generate from (required)
- `-n`, `--count`: how many items to generate (default `10`, must not be negative)
- `-f`, `--format`: `csv`, `json`, `xml` or `tsv` (default `csv`)
- `-o`, `--output`: the output file (required); its directory must already exist
- `-s`, `--seed`: a non-negative seed for reproducible output
- `-m`, `--mode`: `random`, `sequential` or `reverse` (default `random`)

The command prints its progress to standard output. It prints errors to
standard error and exits with status 1. An error can be a missing output
directory, a pattern that cannot be used, a mode the pattern does not support,
or a file that cannot be written.

Sequential and reverse modes work only for patterns of exactly the form
`[a-z]{N}` (any range of lower-case letters) and `[0-9]{N}`:

```
regex-data-gen generate -p "[0-9]{3}" -n 5 -m sequential -f json -o numbers.json
```

Check whether a pattern is valid:

```
regex-data-gen validate "[a-z]+@[a-z]+\.com"
```

`validate` prints `✓ Pattern '...' is valid` and exits with 0. Otherwise it
prints `✗ Pattern '...' is invalid: ...` and exits with 1. `--version` prints
the version.

## Library

```python
from regexdatagen.data_generator import DataGenerator, GenerationMode
from regexdatagen.exporters import CsvExporter, JsonExporter, exporter_for

generator = DataGenerator(r"[A-Z]{3}[0-9]{3}", seed=123)
items = generator.generate(5)

CsvExporter().export(items, "codes.csv")
JsonExporter(pretty=False, array_format=False).export(items, "codes.json")
exporter_for("xml").export(items, "codes.xml")

DataGenerator("[a-z]{2}").generate(3, GenerationMode.SEQUENTIAL)
# ["aa", "ab", "ac"]
DataGenerator("[a-z]{2}").generate(3, GenerationMode.REVERSE_SEQUENTIAL)
# ["zz", "yz", "xz"]
DataGenerator("[0-9]{2}").generate(3, "reverse_sequential")
# ["99", "98", "97"]
```

### `regexdatagen.data_generator`

`DataGenerator(pattern, seed=None, ascii_only=False)` checks the pattern and
prepares a sampler for it.

- `generate(count, mode=GenerationMode.RANDOM)` returns a list of items. The
  mode can be a `GenerationMode` or its value: `"random"`, `"sequential"` or
  `"reverse_sequential"`.
- A sequential mode on any other pattern raises `GenerationFailedError`.
- Digit sequences stop once every value has been produced. Reverse letter
  sequences stop in the same way. Forward letter sequences give one extra,
  wrapped-around item past the last combination and then stop.
- The same seed gives the same random items.
- With `ascii_only=True`, `\d`, `\w`, `\s`, `.` and negated classes produce
  ASCII characters only. Otherwise they cover all of Unicode.
- `is_ascii` and `capacity` give two facts about what can be generated: whether
  every item is ASCII, and an upper bound on an item's length in UTF-8 bytes.
  `pattern` gives the pattern.

### `regexdatagen.sampler`

`RegexSampler(pattern, max_repeat=100, ascii_only=False)` draws matching
strings with `sample(rng)`, where `rng` is a `random.Random`. It has the same
`is_ascii` and `capacity` properties.

The sampler supports the following:

- literals, `.`, character classes and the escapes `\d \w \s \D \W \S`
- `\x`, `\u` and `\U` escapes
- alternation, plain, non-capturing and named groups
- the quantifiers `* + ? {n} {n,} {n,m}`
- inline flags `i`, `s`, `x`

Anchors and `\b`-style assertions produce nothing. Unbounded repetition is
capped at `max_repeat` extra repeats. Look-around and backreferences are not
supported and raise `InvalidRegexError`.

### `regexdatagen.regex_engine`

`RegexEngine(pattern)` compiles a pattern with Python's `re`. It offers
`pattern` and `is_match(text)`, which searches anywhere in the text.
`RegexEngine.validate_pattern(pattern)` raises `InvalidRegexError` for a pattern
that does not compile.

### `regexdatagen.exporters`

Every exporter has `export(data, output_path)` and `format_name()`. Files are
written as UTF-8.

- `CsvExporter(headers=["generated_data"])` writes a header row, then one item
  per row.
- `JsonExporter(pretty=True, array_format=True)` writes an array of strings, or
  with `array_format=False` an array of `{"id": n, "value": item}` objects.
  `pretty=True` indents by two spaces.
- `TsvExporter(headers=["generated_data"])` writes a tab-joined header line,
  then one item per line. Tabs and newlines inside an item are written as `\t`
  and `\n`.
- `XmlExporter(root_element="data", item_element="item")` writes an XML
  declaration and one child element per item, all on one line. The item text
  is XML-escaped twice, so `&` appears as `&amp;amp;`.
- `exporter_for(name)` returns a default exporter for `"csv"`, `"json"`,
  `"xml"` or `"tsv"`. It raises `ValueError` for any other name.

### Errors

All errors derive from `RegexDataGenError` in `regexdatagen.errors`:

- `InvalidRegexError`, which is also a `ValueError`
- `GenerationFailedError`
- `ExportFailedError`, raised when a file cannot be created or written