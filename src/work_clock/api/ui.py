"""Static HTML page for the work clock."""

TRACKER_UI_HTML = """<!doctype html>
<html lang="en">
  <head>
    <meta charset="utf-8" />
    <meta name="viewport" content="width=device-width, initial-scale=1" />
    <title>Work Clock</title>
    <style>
      body { font-family: ui-sans-serif, system-ui, sans-serif; margin: 2rem; }
      .row { margin-bottom: 1rem; }
      button { padding: 0.4rem 0.8rem; margin-right: 0.5rem; }
      li { margin-bottom: 0.3rem; }
      #notifications { color: #555; }
    </style>
  </head>
  <body>
    <h1>Work Clock</h1>
    <div class="row">
      <strong id="state">Loading...</strong>
      <span id="elapsed"></span>
    </div>
    <div class="row">
      <button id="clock-in" onclick="post('/tracker/clock-in')">Clock in</button>
      <button id="clock-out" onclick="post('/tracker/clock-out')">Clock out</button>
    </div>
    <div class="row">
      Today <span id="today"></span> |
      Week <span id="week"></span> |
      Total <span id="total"></span>
    </div>
    <h2>Recent history</h2>
    <ul id="history"></ul>
    <form id="edit" hidden onsubmit="submitEdit(event)">
      <input id="edit-in" type="datetime-local" oninput="syncEdit()" />
      <input id="edit-out" type="datetime-local" oninput="syncEdit()" />
      <button id="edit-save" type="submit">Save</button>
      <button type="button" onclick="closeEdit()">Cancel</button>
    </form>
    <ul id="notifications"></ul>
    <script>
      let editing = null;

      function render(data) {
        document.getElementById('state').textContent =
          data.is_working ? 'Working' : 'Not working';
        document.getElementById('elapsed').textContent =
          data.is_working ? data.work_time_display : '';
        document.getElementById('clock-in').disabled = data.is_working;
        document.getElementById('clock-out').disabled = !data.is_working;
        document.getElementById('today').textContent = data.totals.today_display;
        document.getElementById('week').textContent = data.totals.week_display;
        document.getElementById('total').textContent = data.totals.all_time_display;
        const history = document.getElementById('history');
        history.innerHTML = '';
        for (const entry of data.history) {
          const item = document.createElement('li');
          item.textContent = `${entry.date_display} ${entry.clock_in_display}` +
            ` - ${entry.clock_out_display || ''} (${entry.duration_display || ''}) `;
          const edit = document.createElement('button');
          edit.textContent = 'Edit';
          edit.onclick = () => openEdit(entry.id);
          item.appendChild(edit);
          history.appendChild(item);
        }
        const notes = document.getElementById('notifications');
        for (const note of data.notifications) {
          const item = document.createElement('li');
          item.textContent = note.description
            ? `${note.title}: ${note.description}` : note.title;
          notes.prepend(item);
        }
      }

      async function refresh() {
        const res = await fetch('/tracker');
        render(await res.json());
      }

      async function post(path) {
        const res = await fetch(path, { method: 'POST' });
        if (res.ok) render(await res.json());
      }

      async function openEdit(id) {
        const res = await fetch(`/entries/${id}/edit`);
        if (!res.ok) return;
        const form = await res.json();
        editing = id;
        document.getElementById('edit-in').value = form.clock_in;
        document.getElementById('edit-out').value = form.clock_out;
        document.getElementById('edit').hidden = false;
        syncEdit();
      }

      function syncEdit() {
        document.getElementById('edit-save').disabled =
          !document.getElementById('edit-in').value ||
          !document.getElementById('edit-out').value;
      }

      function closeEdit() {
        editing = null;
        document.getElementById('edit').hidden = true;
      }

      async function submitEdit(event) {
        event.preventDefault();
        const res = await fetch(`/entries/${editing}`, {
          method: 'PUT',
          headers: { 'Content-Type': 'application/json' },
          body: JSON.stringify({
            clock_in: document.getElementById('edit-in').value,
            clock_out: document.getElementById('edit-out').value,
          }),
        });
        if (res.ok) closeEdit();
        await refresh();
      }

      refresh();
      setInterval(refresh, 1000);
    </script>
  </body>
</html>
"""
