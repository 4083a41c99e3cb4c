# confdeck

confdeck is a terminal dashboard for a weekly schedule of online
conferences and meetings. Each day of the week holds a list of conferences.
A conference has a title, a link, a start and an end time, an optional
password, an autostart permission, and a week rule: every week, even weeks
or odd weeks.

## Installation

```
pip install .
```

For the tests:

```
pip install ".[test]"
pytest
```

## Running

```
confdeck
```

Options:

- `-t`, `--tick-rate FLOAT`: ticks per second (default 4.0)
- `-f`, `--frame-rate FLOAT`: frames per second (default 60.0)
- `-V`, `--version`: print the version and the config and data directories

The rates must be positive. The measured tick and frame rates are shown in
the top right corner of the screen.

## Using the schedule

The schedule page has one tab for each day, Monday to Sunday.

- Left and Right switch days (wrapping around the week).
- Up and Down move through that day's conferences.
- `e` opens the selected conference in the edit form. A conference must be
  selected, so the day must not be empty.
- `+` opens the form for a new conference; it is added to the selected day.

The form has the fields Title, Start Time, End Time, Link, Password,
Autostart (Deny/Allow) and Week (Every/Even/Odd). While no field is active,
the arrow keys choose a field. Enter makes the chosen field active, and
Enter again releases it. In an active field:

- text fields (at most 50 characters): Left and Right move the cursor,
  characters are inserted, Backspace deletes;
- time fields: Left and Right switch between hours and minutes, digits are
  typed into the selected part (hours up to 23, minutes up to 59);
- Autostart and Week: Up/Right and Down/Left cycle through the options.

Esc saves the conference into the schedule and returns to the schedule
page. An empty password is stored as no password.

By default only one key binding exists: `<ctrl-q>` quits from the schedule
page. Everything else, including switching to the settings page, comes from
the configuration.

## Files

The schedule is read from `files/schedule.json` and the settings from
`files/settings.json`, relative to the working directory. If a file cannot
be opened, confdeck starts with an empty schedule or with default settings;
a file with the wrong shape is an error.

`schedule.json` is an array of seven arrays, Monday first, of conferences:

```json
{
  "title": "Team sync",
  "link": "https://meet.example.com/sync",
  "start_time": "09:30",
  "end_time": "10:00",
  "password": null,
  "autostart_permission": false,
  "week": "Every"
}
```

`settings.json` holds `{"autostart": false, "early_join_minutes": 5}`.

## Configuration

Key bindings and styles are read from the config directory, from any of
`config.json5`, `config.json`, `config.yaml`, `config.toml` and
`config.ini`. Every file present is read, in that order, and later files
override earlier ones. `config.json5` is JSON that may contain `//` and
`/* */` comments. Built-in bindings you do not set keep their defaults.

Key bindings are grouped by mode: `Schedule`, `Settings` and `Edit`. An
action is a name such as `Quit`, `Suspend` or `ClearScreen`, or
`{"ChangeMode": "<mode>"}`:

```json
{
  "keybindings": {
    "Schedule": {"<q>": "Quit", "<s>": {"ChangeMode": "Settings"}},
    "Settings": {"<q>": "Quit", "<b>": {"ChangeMode": "Schedule"}}
  }
}
```

`Suspend` leaves the screen and stops the process as a shell job. Keys that
form a sequence, such as `<g><g>`, must be pressed within one tick.

Styles are grouped by mode as well and are written like `bold red on blue`,
`color42`, `gray5` or `rgb123`. They are read and checked, but the screens
do not use them.

The `CONFDECK_CONFIG` and `CONFDECK_DATA` environment variables override
the config and data directories; otherwise the platform's user directories
are used.

## Logging

Each run writes a fresh `confdeck.log` to the data directory.
`CONFDECK_LOG_LEVEL` sets how much it records: `trace`, `debug`, `info`
(the default), `warn`, `warning`, `error` or `off`.

## Key notation

Keys are written like `<ctrl-q>`, `<alt-enter>` or `<shift-tab>`, with the
prefixes `ctrl-`, `alt-` and `shift-`. Named keys are `esc`, `enter`,
`left`, `right`, `up`, `down`, `home`, `end`, `pageup`, `pagedown`,
`backtab`, `backspace`, `delete`, `insert`, `tab`, `f1` to `f12`, `space`,
`hyphen` and `minus`; any other single character stands for itself. Names
are not case sensitive.

## What confdeck does not do

- Changes made in the edit form stay in memory; the schedule and settings
  are never written back to their files.
- Conferences are not opened or joined: the autostart settings, the early
  join minutes and the week rule are stored but not acted on, and no
  browser is launched.
- The settings page shows a placeholder list of three entries; settings
  cannot be viewed or edited there.
- There is no built-in help screen and no mouse support.